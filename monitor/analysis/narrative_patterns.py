"""
Narrative pattern tables.

Fringe narratives match on plain keywords, mainstream narratives on regular
expressions. Both are hand-authored; nothing here is learned.
"""

from dataclasses import dataclass
from typing import Literal

from monitor.analysis.matchers import Matcher, keywords, regex

NarrativeSeverity = Literal["watch", "emerging", "spreading", "disinfo"]
NarrativeRegion = Literal["global", "brazil", "latam", "mena"]


@dataclass(frozen=True)
class NarrativePattern:
    """Fringe narrative matched by keyword containment."""

    id: str
    keywords: list[Matcher]
    category: str
    severity: NarrativeSeverity

    @property
    def keyword_list(self) -> list[str]:
        return [getattr(k, "keyword", repr(k)) for k in self.keywords]


@dataclass(frozen=True)
class MainstreamNarrativePattern:
    """Mainstream narrative matched by regular expressions."""

    id: str
    name: str
    patterns: list[Matcher]
    category: str
    region: NarrativeRegion | None = None


NARRATIVE_PATTERNS: list[NarrativePattern] = [
    NarrativePattern(
        id="deep-state",
        keywords=keywords("deep state", "shadow government", "permanent state"),
        category="Political",
        severity="watch",
    ),
    NarrativePattern(
        id="cbdc-control",
        keywords=keywords("cbdc control", "digital currency surveillance", "social credit"),
        category="Finance",
        severity="watch",
    ),
    NarrativePattern(
        id="wef-agenda",
        keywords=keywords("great reset", "wef agenda", "world economic forum plot"),
        category="Political",
        severity="watch",
    ),
    NarrativePattern(
        id="bio-weapon",
        keywords=keywords("lab leak", "bioweapon", "gain of function"),
        category="Health",
        severity="emerging",
    ),
    NarrativePattern(
        id="election-fraud",
        keywords=keywords(
            "election fraud", "rigged election", "stolen election", "mail ballot fraud"
        ),
        category="Political",
        severity="watch",
    ),
    NarrativePattern(
        id="ai-doom",
        keywords=keywords("ai doom", "ai extinction", "superintelligence risk", "agi danger"),
        category="Tech",
        severity="emerging",
    ),
    NarrativePattern(
        id="ai-consciousness",
        keywords=keywords("ai sentient", "ai conscious", "ai feelings", "ai alive"),
        category="Tech",
        severity="emerging",
    ),
    NarrativePattern(
        id="robot-replacement",
        keywords=keywords("robots replacing", "automation unemployment", "job automation"),
        category="Economy",
        severity="spreading",
    ),
    NarrativePattern(
        id="china-invasion",
        keywords=keywords("china taiwan invasion", "china war", "south china sea conflict"),
        category="Geopolitical",
        severity="watch",
    ),
    NarrativePattern(
        id="nato-expansion",
        keywords=keywords("nato provocation", "nato aggression", "nato encirclement"),
        category="Geopolitical",
        severity="watch",
    ),
    NarrativePattern(
        id="dollar-collapse",
        keywords=keywords(
            "dollar collapse", "dedollarization", "brics currency", "petrodollar death"
        ),
        category="Finance",
        severity="spreading",
    ),
    NarrativePattern(
        id="vaccine-injury",
        keywords=keywords(
            "vaccine injury", "vaccine side effect", "vaccine death", "turbo cancer"
        ),
        category="Health",
        severity="watch",
    ),
    NarrativePattern(
        id="next-pandemic",
        keywords=keywords("next pandemic", "disease x", "bird flu pandemic"),
        category="Health",
        severity="emerging",
    ),
    NarrativePattern(
        id="depopulation",
        keywords=keywords("depopulation agenda", "fertility crisis", "population control"),
        category="Society",
        severity="disinfo",
    ),
    NarrativePattern(
        id="food-crisis",
        keywords=keywords("food shortage", "engineered famine", "food supply attack"),
        category="Economy",
        severity="emerging",
    ),
    NarrativePattern(
        id="energy-war",
        keywords=keywords("energy crisis manufactured", "green agenda", "energy shortage"),
        category="Economy",
        severity="spreading",
    ),
    NarrativePattern(
        id="grid-collapse",
        keywords=keywords("grid collapse", "power grid attack", "blackout agenda", "emp attack"),
        category="Economy",
        severity="emerging",
    ),
    NarrativePattern(
        id="water-wars",
        keywords=keywords(
            "water privatization", "water crisis engineered", "water shortage agenda"
        ),
        category="Economy",
        severity="watch",
    ),
    NarrativePattern(
        id="lab-grown-food",
        keywords=keywords(
            "lab grown meat danger", "fake food", "synthetic food agenda", "bug diet"
        ),
        category="Health",
        severity="watch",
    ),
    NarrativePattern(
        id="weather-manipulation",
        keywords=keywords(
            "weather weapon", "haarp", "geoengineering", "chemtrail", "weather control"
        ),
        category="Environment",
        severity="disinfo",
    ),
    NarrativePattern(
        id="15-minute-city",
        keywords=keywords(
            "15 minute city", "climate lockdown", "movement restriction", "open air prison"
        ),
        category="Society",
        severity="spreading",
    ),
    NarrativePattern(
        id="digital-id-control",
        keywords=keywords(
            "digital id", "digital passport", "biometric control", "surveillance state"
        ),
        category="Society",
        severity="watch",
    ),
    NarrativePattern(
        id="bank-bail-in",
        keywords=keywords("bail in", "bank confiscation", "savings seizure", "bank theft"),
        category="Finance",
        severity="watch",
    ),
    NarrativePattern(
        id="ai-takeover",
        keywords=keywords(
            "ai takeover", "ai control", "ai overlord", "machine uprising", "skynet"
        ),
        category="Tech",
        severity="watch",
    ),
    NarrativePattern(
        id="space-hoax",
        keywords=keywords("space fake", "moon landing hoax", "flat earth", "nasa lie"),
        category="Tech",
        severity="disinfo",
    ),
    NarrativePattern(
        id="cyber-false-flag",
        keywords=keywords(
            "cyber false flag", "staged cyberattack", "internet kill switch"
        ),
        category="Security",
        severity="watch",
    ),
    NarrativePattern(
        id="demographic-replacement",
        keywords=keywords(
            "great replacement", "replacement migration", "demographic engineering"
        ),
        category="Society",
        severity="disinfo",
    ),
    NarrativePattern(
        id="pharma-conspiracy",
        keywords=keywords("big pharma conspiracy", "suppressed cure", "medical coverup"),
        category="Health",
        severity="watch",
    ),
    NarrativePattern(
        id="controlled-demolition",
        keywords=keywords(
            "controlled demolition economy", "planned collapse", "intentional crash"
        ),
        category="Finance",
        severity="watch",
    ),
    NarrativePattern(
        id="sovereignty-erosion",
        keywords=keywords(
            "sovereignty erosion", "who treaty", "un takeover", "global governance"
        ),
        category="Political",
        severity="emerging",
    ),
]


MAINSTREAM_NARRATIVE_PATTERNS: list[MainstreamNarrativePattern] = [
    # Global economy
    MainstreamNarrativePattern(
        id="soft-landing",
        name="Soft Landing",
        patterns=regex(r"soft landing", r"goldilocks", r"soft[\s-]?landing"),
        category="Economy",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="recession-fears",
        name="Recession Fears",
        patterns=regex(
            r"recession.{0,20}(risk|fear|warn|loom|threat)", r"fear.{0,10}recession"
        ),
        category="Economy",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="rate-pivot",
        name="Fed Pivot",
        patterns=regex(
            r"rate cut", r"fed pivot", r"dovish", r"hawkish", r"fed.{0,10}(pause|hold)"
        ),
        category="Economy",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="china-decoupling",
        name="China Decoupling",
        patterns=regex(
            r"decouple", r"chip ban", r"tech war", r"decoupling", r"china.{0,20}restrict"
        ),
        category="Geopolitics",
        region="global",
    ),
    # Tech / AI
    MainstreamNarrativePattern(
        id="ai-hype",
        name="AI Hype Cycle",
        patterns=regex(
            r"ai revolution",
            r"generative ai",
            r"ai boom",
            r"ai gold rush",
            r"chatgpt",
            r"ai transform",
        ),
        category="Tech",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="ai-regulation",
        name="AI Regulation Push",
        patterns=regex(
            r"\bai\b.{0,20}(regulation|law|ban|rule|govern)", r"regulat.{0,10}\bai\b", r"ai act"
        ),
        category="Tech",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="tech-layoffs",
        name="Tech Layoffs Wave",
        patterns=regex(
            r"layoff",
            r"job cut",
            r"workforce reduction",
            r"downsiz",
            r"let go.{0,10}employee",
        ),
        category="Business",
        region="global",
    ),
    # Political
    MainstreamNarrativePattern(
        id="election-coverage",
        name="Election Coverage",
        patterns=regex(
            r"election",
            r"campaign",
            r"polling",
            r"ballot",
            r"candidate",
            r"vote.{0,5}count",
        ),
        category="Politics",
        region="global",
    ),
    # Geopolitics & security
    MainstreamNarrativePattern(
        id="new-cold-war",
        name="New Cold War",
        patterns=regex(r"new cold war", r"great power competition", r"bloc rivalry"),
        category="Geopolitics",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="taiwan-contingency",
        name="Taiwan Contingency",
        patterns=regex(
            r"taiwan strait", r"taiwan invasion", r"taiwan contingency", r"cross.strait"
        ),
        category="Geopolitics",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="arctic-competition",
        name="Arctic Competition",
        patterns=regex(
            r"arctic race", r"arctic military", r"northern sea route", r"arctic resource"
        ),
        category="Geopolitics",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="nuclear-posture",
        name="Nuclear Posture",
        patterns=regex(
            r"nuclear deterrent", r"nuclear moderniz", r"nuclear treaty", r"arms control"
        ),
        category="Security",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="cyber-threat-landscape",
        name="Cyber Threat Landscape",
        patterns=regex(
            r"cyber threat", r"ransomware wave", r"state hacker", r"cyber defense"
        ),
        category="Security",
        region="global",
    ),
    # Economy & finance
    MainstreamNarrativePattern(
        id="debt-spiral",
        name="Debt Spiral",
        patterns=regex(
            r"debt ceiling",
            r"fiscal crisis",
            r"national debt",
            r"credit downgrade",
            r"bond sell.off",
        ),
        category="Economy",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="de-globalization",
        name="De-Globalization",
        patterns=regex(
            r"reshoring",
            r"nearshoring",
            r"friend.shoring",
            r"onshoring",
            r"supply chain diversif",
        ),
        category="Economy",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="crypto-regulation",
        name="Crypto Regulation",
        patterns=regex(
            r"crypto regulat", r"stablecoin law", r"defi regulat", r"sec.*crypto"
        ),
        category="Finance",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="commodity-super-cycle",
        name="Commodity Super Cycle",
        patterns=regex(
            r"commodity boom", r"super cycle", r"commodity rally", r"resource nationalism"
        ),
        category="Economy",
        region="global",
    ),
    # Climate & energy
    MainstreamNarrativePattern(
        id="energy-security",
        name="Energy Security",
        patterns=regex(
            r"energy security",
            r"energy independence",
            r"energy crisis",
            r"grid resilience",
        ),
        category="Economy",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="climate-tipping-point",
        name="Climate Tipping Point",
        patterns=regex(
            r"tipping point",
            r"point of no return",
            r"climate emergency",
            r"record heat",
            r"record warm",
        ),
        category="Environment",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="extreme-weather-impact",
        name="Extreme Weather Impact",
        patterns=regex(
            r"extreme weather",
            r"unprecedented storm",
            r"record flood",
            r"climate disaster",
            r"weather catastrophe",
        ),
        category="Environment",
        region="global",
    ),
    # Tech & society
    MainstreamNarrativePattern(
        id="ai-arms-race",
        name="AI Arms Race",
        patterns=regex(
            r"ai race", r"ai competition", r"ai supremacy", r"ai dominance", r"ai lead"
        ),
        category="Tech",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="social-media-regulation",
        name="Social Media Regulation",
        patterns=regex(
            r"social media ban",
            r"platform regulation",
            r"content moderation",
            r"section 230",
        ),
        category="Tech",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="space-race-narrative",
        name="Space Race",
        patterns=regex(
            r"space race",
            r"moon race",
            r"mars race",
            r"commercial space",
            r"space economy",
        ),
        category="Tech",
        region="global",
    ),
    # Partisan framing
    MainstreamNarrativePattern(
        id="conservative-framing",
        name="Conservative Framing",
        patterns=regex(
            r"\bwoke\b",
            r"radical left",
            r"socialist agenda",
            r"government overreach",
            r"nanny state",
            r"war on freedom",
            r"cancel culture",
            r"leftist mob",
            r"virtue signal",
        ),
        category="Politics",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="progressive-framing",
        name="Progressive Framing",
        patterns=regex(
            r"far.right",
            r"maga extremis",
            r"threat to democracy",
            r"white nationalis",
            r"climate denier",
            r"book ban",
            r"assault on rights",
            r"\bfascis",
            r"\bauthoritarian",
        ),
        category="Politics",
        region="global",
    ),
    # Frame battles
    MainstreamNarrativePattern(
        id="immigration-security-frame",
        name="Immigration Security Frame",
        patterns=regex(
            r"border crisis",
            r"illegal crossing",
            r"illegal alien",
            r"border invasion",
            r"cartel threat",
            r"migrant crime",
        ),
        category="Politics",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="immigration-humanitarian-frame",
        name="Immigration Humanitarian Frame",
        patterns=regex(
            r"asylum seeker",
            r"refugee rights",
            r"family separation",
            r"\bdreamer",
            r"undocumented worker",
            r"humanitarian border",
        ),
        category="Politics",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="climate-urgency-frame",
        name="Climate Urgency Frame",
        patterns=regex(
            r"climate emergency",
            r"climate crisis",
            r"existential threat",
            r"planet burning",
            r"code red",
        ),
        category="Environment",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="climate-skeptic-frame",
        name="Climate Skeptic Frame",
        patterns=regex(
            r"climate hoax",
            r"climate alarmis",
            r"green scam",
            r"climate hysteria",
            r"climate grift",
        ),
        category="Environment",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="gun-rights-frame",
        name="Gun Rights Frame",
        patterns=regex(
            r"second amendment",
            r"gun rights",
            r"right to bear",
            r"gun freedom",
            r"armed citizen",
            r"self defense",
        ),
        category="Politics",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="gun-control-frame",
        name="Gun Control Frame",
        patterns=regex(
            r"gun violence epidemic",
            r"mass shooting",
            r"gun reform",
            r"gun safety",
            r"ban assault",
        ),
        category="Politics",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="ai-optimist-frame",
        name="AI Optimist Frame",
        patterns=regex(
            r"ai breakthrough",
            r"ai revolution",
            r"ai opportunity",
            r"ai potential",
            r"ai benefit",
            r"ai progress",
        ),
        category="Tech",
        region="global",
    ),
    MainstreamNarrativePattern(
        id="ai-alarmist-frame",
        name="AI Alarmist Frame",
        patterns=regex(
            r"ai threat",
            r"ai danger",
            r"ai risk",
            r"ai destroy",
            r"ai replace",
            r"ai out of control",
            r"ai unsafe",
        ),
        category="Tech",
        region="global",
    ),
    # Brazil
    MainstreamNarrativePattern(
        id="lula-government",
        name="Lula Government",
        patterns=regex(r"\blula\b", r"planalto", r"pt.{0,10}governo", r"governo federal"),
        category="Politics",
        region="brazil",
    ),
    MainstreamNarrativePattern(
        id="bolsonaro-factor",
        name="Bolsonaro Factor",
        patterns=regex(r"bolsonaro", r"jan(eiro)?\s*8", r"8 de janeiro", r"inelegib"),
        category="Politics",
        region="brazil",
    ),
    MainstreamNarrativePattern(
        id="selic-rates",
        name="Selic Policy",
        patterns=regex(r"selic", r"banco central", r"copom", r"taxa de juros"),
        category="Economy",
        region="brazil",
    ),
    MainstreamNarrativePattern(
        id="real-pressure",
        name="Real Currency",
        patterns=regex(
            r"dolar.{0,10}real", r"cambio", r"desvaloriza", r"real.{0,10}dolar"
        ),
        category="Economy",
        region="brazil",
    ),
    MainstreamNarrativePattern(
        id="fiscal-framework",
        name="Fiscal Framework",
        patterns=regex(
            r"arcabou[cç]o fiscal", r"teto de gastos", r"meta fiscal", r"d[ée]ficit"
        ),
        category="Economy",
        region="brazil",
    ),
    MainstreamNarrativePattern(
        id="amazon-watch",
        name="Amazon Watch",
        patterns=regex(
            r"amaz[oô]nia", r"desmatamento", r"ibama", r"floresta", r"queimada"
        ),
        category="Environment",
        region="brazil",
    ),
    MainstreamNarrativePattern(
        id="brics-brazil",
        name="BRICS Brazil",
        patterns=regex(r"brics", r"c[úu]pula", r"sul.{0,5}sul", r"novo banco"),
        category="Geopolitics",
        region="brazil",
    ),
    MainstreamNarrativePattern(
        id="brazil-crime",
        name="Organized Crime",
        patterns=regex(
            r"\bpcc\b",
            r"fac[çc][ãa]o",
            r"mil[ií]cia",
            r"seguran[çc]a p[úu]blica",
            r"crime organizado",
        ),
        category="Security",
        region="brazil",
    ),
    MainstreamNarrativePattern(
        id="military-smear",
        name="Armed Forces Smear",
        patterns=regex(
            r"ex[ée]rcito.{0,15}(ataque|cr[ií]tica|pol[eê]mica)",
            r"for[çc]as armadas.{0,15}cr[ií]tica",
            r"generais.{0,15}pol[eê]mic",
            r"militares.{0,15}investigad",
        ),
        category="Politics",
        region="brazil",
    ),
    MainstreamNarrativePattern(
        id="brazil-cyber",
        name="Brazil Cyber Threats",
        patterns=regex(
            r"ciberataque",
            r"vazamento de dados",
            r"hacker.*brasil",
            r"seguran[çc]a digital",
        ),
        category="Security",
        region="brazil",
    ),
    MainstreamNarrativePattern(
        id="brazil-climate",
        name="Brazil Climate Events",
        patterns=regex(
            r"\bseca\b",
            r"enchente",
            r"chuva extrema",
            r"desastre clim[áa]tico",
            r"evento extremo",
        ),
        category="Environment",
        region="brazil",
    ),
    MainstreamNarrativePattern(
        id="brazil-fiscal-crisis",
        name="Brazil Fiscal Pressure",
        patterns=regex(
            r"d[íi]vida p[úu]blica",
            r"risco fiscal",
            r"nota de cr[ée]dito",
            r"spread soberano",
        ),
        category="Economy",
        region="brazil",
    ),
    MainstreamNarrativePattern(
        id="brazil-corruption",
        name="Institutional Corruption",
        patterns=regex(
            r"corrup[çc][ãa]o",
            r"propina",
            r"lavagem de dinheiro",
            r"desvio",
            r"peculato",
            r"improbidade",
            r"dela[çc][ãa]o",
            r"licita[çc][ãa]o irregular",
            r"superfaturamento",
            r"caixa dois",
            r"tr[áa]fico de influ[êe]ncia",
        ),
        category="Politics",
        region="brazil",
    ),
    MainstreamNarrativePattern(
        id="brazil-right-framing",
        name="Brazil Right Framing",
        patterns=regex(
            r"esquerdista",
            r"comunista",
            r"marxista",
            r"doutrina[çc][ãa]o",
            r"ideologia de g[êe]nero",
            r"mamata",
            r"petralha",
            r"bolivariano",
            r"ditadura do judici[áa]rio",
            r"ativismo judicial",
            r"aparelhamento",
        ),
        category="Politics",
        region="brazil",
    ),
    MainstreamNarrativePattern(
        id="brazil-left-framing",
        name="Brazil Left Framing",
        patterns=regex(
            r"fascista",
            r"golpista",
            r"miliciano",
            r"genocida",
            r"negacionista",
            r"bolsonarismo",
            r"extrema direita",
            r"amea[çc]a [àa] democracia",
            r"discurso de [óo]dio",
            r"ataque [àa]s institui[çc][õo]es",
            r"entreguista",
        ),
        category="Politics",
        region="brazil",
    ),
    MainstreamNarrativePattern(
        id="brazil-security-hardline",
        name="Brazil Security Hardline",
        patterns=regex(
            r"bandido bom [ée] bandido morto",
            r"armar o cidad[ãa]o",
            r"excludente de ilicitude",
            r"redu[çc][ãa]o da maioridade",
            r"toler[âa]ncia zero",
            r"m[ãa]o dura",
        ),
        category="Politics",
        region="brazil",
    ),
    MainstreamNarrativePattern(
        id="brazil-security-rights",
        name="Brazil Security Rights",
        patterns=regex(
            r"viol[êe]ncia policial",
            r"encarceramento em massa",
            r"desmilitariza[çc][ãa]o",
            r"direitos humanos",
            r"abuso de autoridade",
        ),
        category="Politics",
        region="brazil",
    ),
    MainstreamNarrativePattern(
        id="brazil-economy-liberal",
        name="Brazil Free Market Frame",
        patterns=regex(
            r"privatiza[çc][ãa]o",
            r"estado inchado",
            r"carga tribut[áa]ria",
            r"livre mercado",
            r"menos estado",
            r"reforma administrativa",
        ),
        category="Economy",
        region="brazil",
    ),
    MainstreamNarrativePattern(
        id="brazil-economy-statist",
        name="Brazil Statist Frame",
        patterns=regex(
            r"papel do estado",
            r"investimento p[úu]blico",
            r"programa social",
            r"soberania nacional",
            r"empresa estrat[ée]gica",
            r"neoliberal",
            r"privataria",
        ),
        category="Economy",
        region="brazil",
    ),
    MainstreamNarrativePattern(
        id="brazil-environment-dev",
        name="Brazil Development Frame",
        patterns=regex(
            r"soberania sobre amaz[ôo]nia",
            r"agroneg[óo]cio",
            r"marco temporal",
            r"minera[çc][ãa]o",
            r"desenvolvimento sustent[áa]vel",
        ),
        category="Environment",
        region="brazil",
    ),
    MainstreamNarrativePattern(
        id="brazil-environment-prot",
        name="Brazil Environmentalist Frame",
        patterns=regex(
            r"desmatamento recorde",
            r"ecoc[íi]dio",
            r"crime ambiental",
            r"terra ind[íi]gena",
            r"prote[çc][ãa]o ambiental",
            r"garimpo ilegal",
        ),
        category="Environment",
        region="brazil",
    ),
    # Latin America
    MainstreamNarrativePattern(
        id="argentina-milei",
        name="Milei Argentina",
        patterns=regex(
            r"milei", r"argentina.{0,15}econom", r"peso argentino", r"libertad avanza"
        ),
        category="Politics",
        region="latam",
    ),
    MainstreamNarrativePattern(
        id="argentina-crisis",
        name="Argentina Crisis",
        patterns=regex(
            r"inflaci[oó]n argentina", r"crisis argentina", r"fmi.{0,10}argentina", r"\bcepo\b"
        ),
        category="Economy",
        region="latam",
    ),
    MainstreamNarrativePattern(
        id="mexico-amlo",
        name="AMLO/Sheinbaum",
        patterns=regex(
            r"\bamlo\b", r"sheinbaum", r"\bmorena\b", r"mexico.{0,10}gobierno", r"lópez obrador"
        ),
        category="Politics",
        region="latam",
    ),
    MainstreamNarrativePattern(
        id="mexico-cartel",
        name="Mexico Cartel Violence",
        patterns=regex(r"cartel", r"narco", r"sinaloa", r"violencia.{0,10}mexico", r"\bcjng\b"),
        category="Security",
        region="latam",
    ),
    MainstreamNarrativePattern(
        id="venezuela-crisis",
        name="Venezuela Crisis",
        patterns=regex(
            r"maduro",
            r"venezuela.{0,15}crisis",
            r"oposici[oó]n venezolana",
            r"guaid[oó]",
        ),
        category="Politics",
        region="latam",
    ),
    MainstreamNarrativePattern(
        id="latam-china",
        name="China in LatAm",
        patterns=regex(
            r"china.{0,15}am[eé]rica latina",
            r"inversi[oó]n china",
            r"belt and road.{0,10}latam",
            r"china.{0,10}infraestruct",
        ),
        category="Geopolitics",
        region="latam",
    ),
    MainstreamNarrativePattern(
        id="latam-us",
        name="US-LatAm Relations",
        patterns=regex(
            r"estados unidos.{0,15}am[eé]rica latina",
            r"washington.{0,10}regi[oó]n",
            r"\bus\b.{0,10}latin america",
        ),
        category="Geopolitics",
        region="latam",
    ),
    # Middle East
    MainstreamNarrativePattern(
        id="iran-sanctions-pressure",
        name="Iran Sanctions Pressure",
        patterns=regex(
            r"iran.{0,20}sanction", r"maximum pressure", r"snapback", r"rial.{0,10}(fall|record)"
        ),
        category="Geopolitics",
        region="mena",
    ),
    MainstreamNarrativePattern(
        id="red-sea-shipping",
        name="Red Sea Shipping",
        patterns=regex(
            r"red sea", r"houthi.{0,20}(ship|vessel|attack)", r"bab.el.mandeb", r"suez.{0,10}divert"
        ),
        category="Security",
        region="mena",
    ),
]


def get_narrative_pattern(narrative_id: str) -> NarrativePattern | None:
    """Get a fringe narrative pattern by its ID."""
    for pattern in NARRATIVE_PATTERNS:
        if pattern.id == narrative_id:
            return pattern
    return None
