"""
Compound patterns - cross-topic combinations that signal escalation when
several related topics are active in the same news batch.

Each pattern carries analyst-style narrative text: three key judgments,
indicators, confirmation signals, assumptions and change triggers.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CompoundPattern:
    """Cross-topic correlation definition."""

    id: str
    topics: tuple[str, ...]
    min_topics: int
    boost_factor: float
    name: str
    prediction: str
    key_judgments: tuple[str, ...]
    indicators: tuple[str, ...]
    confirmation_signals: tuple[str, ...]
    assumptions: tuple[str, ...]
    change_triggers: tuple[str, ...]


COMPOUND_PATTERNS: list[CompoundPattern] = [
    CompoundPattern(
        id="trade-war-escalation",
        topics=("tariffs", "china-tensions", "supply-chain"),
        min_topics=2,
        boost_factor=1.5,
        name="Trade War Escalation",
        prediction="Expect market volatility and supply chain disruption",
        key_judgments=(
            "Tariff rhetoric and US-China friction are reinforcing each other",
            "Importers are likely to front-load orders ahead of new duties",
            "Retaliatory measures are more likely than negotiated relief in the near term",
        ),
        indicators=(
            "New tariff schedules or exclusion list changes announced",
            "Chinese commerce ministry statements on countermeasures",
            "Freight rate spikes on trans-Pacific routes",
        ),
        confirmation_signals=(
            "Formal retaliation list published by Beijing",
            "Equity weakness concentrated in exporters and semiconductors",
            "Corporate guidance cuts citing tariff costs",
        ),
        assumptions=(
            "Neither side is prepared to concede before domestic political deadlines",
            "Supply chains cannot be rerouted within a single quarter",
            "Markets have not fully priced a prolonged dispute",
        ),
        change_triggers=(
            "Announcement of high-level trade talks",
            "Tariff suspension or extended exemption windows",
            "Joint statement on a purchase agreement",
        ),
    ),
    CompoundPattern(
        id="stagflation-risk",
        topics=("inflation", "fed-rates", "layoffs"),
        min_topics=2,
        boost_factor=1.8,
        name="Stagflation Risk",
        prediction="Economic headwinds combining - defensive positioning advised",
        key_judgments=(
            "Sticky prices are coinciding with a softening labor market",
            "The central bank has limited room to ease without reigniting inflation",
            "Real incomes are likely to fall for a broad share of households",
        ),
        indicators=(
            "Core inflation prints above consensus",
            "Rising weekly jobless claims",
            "Fed officials stressing patience on rate cuts",
        ),
        confirmation_signals=(
            "Negative payroll revision alongside firm CPI",
            "Consumer sentiment at multi-year lows",
            "Yield curve steepening driven by long-end inflation risk",
        ),
        assumptions=(
            "Energy and shelter costs stay elevated",
            "Layoffs spread beyond a single sector",
            "Fiscal support does not offset weaker hiring",
        ),
        change_triggers=(
            "Sharp drop in core inflation for two consecutive months",
            "Strong rebound in hiring data",
            "Commodity price collapse easing input costs",
        ),
    ),
    CompoundPattern(
        id="geopolitical-crisis",
        topics=("russia-ukraine", "israel-gaza", "china-tensions"),
        min_topics=2,
        boost_factor=2.0,
        name="Multi-Front Geopolitical Crisis",
        prediction="Multiple conflict zones active - risk-off sentiment likely",
        key_judgments=(
            "Simultaneous crises are stretching diplomatic bandwidth",
            "Military aid priorities are competing across theaters",
            "Adversaries may exploit divided attention to test red lines",
        ),
        indicators=(
            "Concurrent emergency security council sessions",
            "Rising safe-haven flows into gold and treasuries",
            "Shipping insurance premiums climbing in multiple regions",
        ),
        confirmation_signals=(
            "New offensive operations in more than one theater",
            "Allied capitals announcing emergency aid packages",
            "Volatility index spike above recent range",
        ),
        assumptions=(
            "No single theater de-escalates in the coming weeks",
            "Great powers remain on opposing sides in each conflict",
            "Domestic politics limit the appetite for new commitments",
        ),
        change_triggers=(
            "Ceasefire agreed in any major theater",
            "Direct leader-level talks between rival powers",
            "Significant drawdown of deployed forces",
        ),
    ),
    CompoundPattern(
        id="tech-regulatory-storm",
        topics=("ai-regulation", "big-tech", "crypto"),
        min_topics=2,
        boost_factor=1.4,
        name="Tech Regulatory Storm",
        prediction="Coordinated regulatory action may impact tech sector",
        key_judgments=(
            "Regulators are moving on several technology fronts at once",
            "Compliance costs will weigh on the largest platforms first",
            "Enforcement is shifting from guidance to litigation",
        ),
        indicators=(
            "New antitrust filings against major platforms",
            "Draft AI rules published for comment",
            "Enforcement actions against crypto exchanges",
        ),
        confirmation_signals=(
            "Court rulings upholding regulator authority",
            "Companies restructuring products to comply",
            "Sector underperformance versus the broad market",
        ),
        assumptions=(
            "Political consensus exists for tougher tech oversight",
            "Agencies have the resources to pursue parallel cases",
            "Industry lobbying fails to delay rulemaking",
        ),
        change_triggers=(
            "Legislative preemption of agency rules",
            "Major settlement ending a flagship case",
            "Leadership change at a key regulator",
        ),
    ),
    CompoundPattern(
        id="financial-stress",
        topics=("bank-crisis", "fed-rates", "housing"),
        min_topics=2,
        boost_factor=1.7,
        name="Financial Sector Stress",
        prediction="Banking sector under pressure - monitor closely",
        key_judgments=(
            "Rate levels are exposing balance sheet weaknesses at lenders",
            "Real estate exposure is the most likely transmission channel",
            "Deposit flight risk is elevated at regional banks",
        ),
        indicators=(
            "Bank equity drawdowns concentrated in regional lenders",
            "Rising use of emergency lending facilities",
            "Commercial real estate loan delinquencies",
        ),
        confirmation_signals=(
            "A bank placed into receivership",
            "Deposit outflow data showing acceleration",
            "Widening interbank funding spreads",
        ),
        assumptions=(
            "Rates stay higher for longer",
            "Property valuations continue to reprice downward",
            "Regulators intervene only after visible failures",
        ),
        change_triggers=(
            "Emergency rate cut or liquidity backstop",
            "Strong quarterly bank earnings with stable deposits",
            "Stabilization in commercial property prices",
        ),
    ),
    CompoundPattern(
        id="nuclear-escalation",
        topics=("russia-ukraine", "iran", "nuclear"),
        min_topics=2,
        boost_factor=2.5,
        name="Nuclear Escalation",
        prediction="Heightened nuclear rhetoric - extreme risk-off likely",
        key_judgments=(
            "Nuclear signaling is being used to deter outside intervention",
            "Arms control channels are weaker than at any point in decades",
            "Miscalculation risk is rising even if deliberate use remains unlikely",
        ),
        indicators=(
            "Official statements referencing nuclear doctrine",
            "Reports of enrichment beyond declared levels",
            "Unusual strategic force exercises",
        ),
        confirmation_signals=(
            "Deployment of tactical nuclear assets announced",
            "IAEA access restricted or inspectors expelled",
            "Emergency consultations among nuclear-armed states",
        ),
        assumptions=(
            "Rhetoric reflects genuine policy signaling, not only domestic messaging",
            "Verification regimes remain degraded",
            "Conventional conflicts continue without settlement",
        ),
        change_triggers=(
            "Resumption of arms control dialogue",
            "Restored inspector access",
            "Public de-escalation statements from leadership",
        ),
    ),
    CompoundPattern(
        id="middle-east-escalation",
        topics=("israel-gaza", "iran"),
        min_topics=2,
        boost_factor=1.8,
        name="Middle East Escalation",
        prediction="Regional conflict expansion risk",
        key_judgments=(
            "The Gaza conflict is drawing in Iranian-aligned actors",
            "Direct Israel-Iran exchanges are more likely than a year ago",
            "Energy infrastructure in the Gulf is a plausible target",
        ),
        indicators=(
            "Strikes attributed to proxy groups across borders",
            "Naval incidents near the Strait of Hormuz",
            "Evacuation advisories for foreign nationals",
        ),
        confirmation_signals=(
            "Direct strike on Iranian or Israeli territory",
            "Oil price spike above recent highs",
            "Emergency deployment of additional naval groups",
        ),
        assumptions=(
            "Proxy networks retain operational capacity",
            "Mediation efforts remain stalled",
            "Outside powers avoid direct intervention",
        ),
        change_triggers=(
            "Hostage release or prisoner exchange deal",
            "Announced regional ceasefire",
            "Back-channel talks confirmed by mediators",
        ),
    ),
    CompoundPattern(
        id="energy-supply-shock",
        topics=("russia-ukraine", "iran", "supply-chain"),
        min_topics=2,
        boost_factor=1.7,
        name="Energy Supply Shock",
        prediction="Energy price spikes and supply disruption expected",
        key_judgments=(
            "Two major producer regions face conflict-related disruption",
            "Spare capacity is insufficient to absorb a simultaneous outage",
            "Downstream shortages are likely in refined products first",
        ),
        indicators=(
            "Attacks on pipelines or export terminals",
            "Tanker rerouting away from conflict zones",
            "Strategic reserve release discussions",
        ),
        confirmation_signals=(
            "Benchmark crude above recent trading range",
            "Diesel and jet fuel cracks widening",
            "Rationing or export bans announced by producers",
        ),
        assumptions=(
            "Producer conflicts persist through the next quarter",
            "OPEC members do not raise output quickly",
            "Demand remains resilient",
        ),
        change_triggers=(
            "Coordinated reserve release by consuming nations",
            "Production increase announced by OPEC",
            "Restoration of damaged export capacity",
        ),
    ),
    CompoundPattern(
        id="recession-signal",
        topics=("layoffs", "housing", "fed-rates"),
        min_topics=2,
        boost_factor=1.9,
        name="Recession Signal",
        prediction="Classic recession indicators aligning",
        key_judgments=(
            "Interest-rate-sensitive sectors are contracting together",
            "Job losses are moving from tech into broader industries",
            "Housing weakness is feeding into consumer spending",
        ),
        indicators=(
            "Falling home sales and builder sentiment",
            "Announced layoffs across multiple sectors",
            "Inverted yield curve persisting",
        ),
        confirmation_signals=(
            "Two consecutive negative payroll reports",
            "Rising unemployment rate crossing trigger thresholds",
            "Retail sales contraction",
        ),
        assumptions=(
            "Monetary policy remains restrictive",
            "Household savings buffers are depleted",
            "Business investment stays cautious",
        ),
        change_triggers=(
            "Aggressive rate cuts",
            "Housing starts rebound",
            "Surprise strength in hiring",
        ),
    ),
    CompoundPattern(
        id="inflation-spiral",
        topics=("inflation", "supply-chain", "climate"),
        min_topics=2,
        boost_factor=1.6,
        name="Inflation Spiral",
        prediction="Multiple inflation drivers converging",
        key_judgments=(
            "Supply disruptions and weather shocks are adding to price pressure",
            "Inflation expectations risk becoming unanchored",
            "Food and transport costs are leading the move",
        ),
        indicators=(
            "Producer prices accelerating",
            "Weather damage to crops or infrastructure",
            "Shipping delays at major ports",
        ),
        confirmation_signals=(
            "Rising long-run inflation expectations in surveys",
            "Wage demands indexed to recent inflation",
            "Central bank shifts to hawkish guidance",
        ),
        assumptions=(
            "Supply shocks are not transitory",
            "Demand remains strong enough to absorb price increases",
            "Currency weakness adds imported inflation",
        ),
        change_triggers=(
            "Freight costs normalize",
            "Favorable harvest reports",
            "Sharp demand slowdown",
        ),
    ),
    CompoundPattern(
        id="dollar-stress",
        topics=("fed-rates", "crypto", "china-tensions"),
        min_topics=2,
        boost_factor=1.5,
        name="Dollar Stress",
        prediction="Currency instability concerns rising",
        key_judgments=(
            "Policy uncertainty is weakening confidence in dollar assets",
            "Alternative stores of value are attracting speculative flows",
            "Geopolitical rivals are promoting non-dollar settlement",
        ),
        indicators=(
            "Dollar index breaking recent support",
            "Bitcoin and gold rallying together",
            "Foreign central banks reducing treasury holdings",
        ),
        confirmation_signals=(
            "Failed or weak treasury auctions",
            "Bilateral trade deals settled in local currencies",
            "Official statements questioning reserve status",
        ),
        assumptions=(
            "Rate differentials continue to narrow",
            "Geopolitical tension persists",
            "No coordinated intervention to support the dollar",
        ),
        change_triggers=(
            "Hawkish surprise from the Fed",
            "Crypto market sell-off",
            "Improved US-China dialogue",
        ),
    ),
    CompoundPattern(
        id="ai-disruption-wave",
        topics=("ai-regulation", "layoffs", "big-tech"),
        min_topics=2,
        boost_factor=1.6,
        name="AI Disruption Wave",
        prediction="AI-driven workforce disruption accelerating",
        key_judgments=(
            "Companies are citing AI automation in workforce decisions",
            "Political pressure for AI labor protections is building",
            "Large platforms are consolidating AI capability",
        ),
        indicators=(
            "Layoff announcements referencing automation",
            "Legislative hearings on AI and employment",
            "Record AI capital expenditure guidance",
        ),
        confirmation_signals=(
            "Sector-wide hiring freezes in white-collar roles",
            "Union actions targeting AI deployment",
            "Draft rules on algorithmic hiring or firing",
        ),
        assumptions=(
            "AI tools deliver measurable productivity gains",
            "Regulation lags deployment",
            "Labor market cannot absorb displaced workers quickly",
        ),
        change_triggers=(
            "High-profile AI deployment failures",
            "Binding AI labor legislation passed",
            "Broad hiring rebound in affected sectors",
        ),
    ),
    CompoundPattern(
        id="disinfo-storm",
        topics=("deepfake", "election", "ai-regulation"),
        min_topics=2,
        boost_factor=1.7,
        name="Disinfo Storm",
        prediction="AI-generated misinformation concerns surging",
        key_judgments=(
            "Synthetic media is being deployed around electoral events",
            "Platforms are struggling to label or remove manipulated content",
            "Regulators are under pressure to act before votes take place",
        ),
        indicators=(
            "Viral deepfakes of candidates",
            "Election officials issuing misinformation warnings",
            "Platform policy changes on synthetic media",
        ),
        confirmation_signals=(
            "Attribution of campaigns to state actors",
            "Emergency content takedown orders",
            "Measurable voter confusion reported",
        ),
        assumptions=(
            "Generative tools remain freely available",
            "Detection lags generation capability",
            "Polarized audiences amplify unverified content",
        ),
        change_triggers=(
            "Effective watermarking adopted at scale",
            "Cross-platform takedown agreements",
            "Elections concluded without major incident",
        ),
    ),
    CompoundPattern(
        id="pandemic-redux",
        topics=("pandemic", "supply-chain", "inflation"),
        min_topics=2,
        boost_factor=2.0,
        name="Pandemic Redux",
        prediction="Health crisis with economic spillover",
        key_judgments=(
            "A new outbreak is beginning to affect economic activity",
            "Manufacturing hubs are exposed to health-related closures",
            "Price effects will appear first in medical and consumer goods",
        ),
        indicators=(
            "Rising case counts in multiple countries",
            "Factory closures or worker absenteeism reports",
            "Stockpiling behavior in retail data",
        ),
        confirmation_signals=(
            "WHO emergency declaration",
            "Travel restrictions reimposed",
            "Port throughput declines",
        ),
        assumptions=(
            "Transmission is sustained human to human",
            "Vaccines or treatments are not immediately available",
            "Governments respond with movement restrictions",
        ),
        change_triggers=(
            "Containment confirmed by health authorities",
            "Rapid vaccine approval",
            "Case counts peaking and declining",
        ),
    ),
    CompoundPattern(
        id="climate-shock",
        topics=("climate", "supply-chain", "inflation"),
        min_topics=2,
        boost_factor=1.6,
        name="Climate Shock",
        prediction="Weather events disrupting economy",
        key_judgments=(
            "Extreme weather is disrupting production and transport",
            "Insurance and reconstruction costs are climbing",
            "Regional shortages are feeding into national price data",
        ),
        indicators=(
            "Major storms or wildfires affecting industrial areas",
            "Waterway or port closures due to weather",
            "Emergency disaster declarations",
        ),
        confirmation_signals=(
            "Insurers withdrawing from exposed markets",
            "Commodity price spikes tied to weather",
            "Corporate earnings citing weather disruption",
        ),
        assumptions=(
            "Weather events continue at above-average frequency",
            "Infrastructure is not resilient to repeated shocks",
            "Supply chains lack regional redundancy",
        ),
        change_triggers=(
            "Seasonal weather normalization",
            "Rapid infrastructure repair",
            "Alternative supply routes established",
        ),
    ),
    CompoundPattern(
        id="social-pressure",
        topics=("inflation", "layoffs", "immigration", "election"),
        min_topics=3,
        boost_factor=1.8,
        name="Social Pressure",
        prediction="Economic stress combining with political flashpoints",
        key_judgments=(
            "Cost-of-living strain is shaping electoral debate",
            "Immigration is being framed as an economic grievance",
            "Populist messaging is gaining ground",
        ),
        indicators=(
            "Polling shifts toward anti-incumbent candidates",
            "Protests over wages or prices",
            "Hardline immigration proposals in campaigns",
        ),
        confirmation_signals=(
            "Incumbent losses in local or national votes",
            "Policy reversals on migration",
            "Rising strike activity",
        ),
        assumptions=(
            "Economic pain persists through the campaign season",
            "Parties compete on immigration restriction",
            "Media coverage amplifies grievance narratives",
        ),
        change_triggers=(
            "Sharp improvement in real wages",
            "Cross-party agreement on migration policy",
            "Election outcome resolving uncertainty",
        ),
    ),
    CompoundPattern(
        id="cyber-warfare-escalation",
        topics=("state-hacking", "russia-ukraine", "china-tensions"),
        min_topics=2,
        boost_factor=2.0,
        name="Cyber Warfare Escalation",
        prediction="State-sponsored cyber operations intensifying",
        key_judgments=(
            "State cyber units are operating in support of geopolitical aims",
            "Western infrastructure is a target for pre-positioning",
            "Attribution is becoming faster and more public",
        ),
        indicators=(
            "Government advisories naming state actors",
            "Intrusions detected in utilities or telecoms",
            "Sanctions tied to cyber operations",
        ),
        confirmation_signals=(
            "Disruptive attack on critical services",
            "Joint attribution by allied intelligence agencies",
            "Offensive cyber response publicly acknowledged",
        ),
        assumptions=(
            "Cyber operations remain below the threshold of armed response",
            "Adversaries retain access to compromised networks",
            "Defensive capacity lags attacker capability",
        ),
        change_triggers=(
            "Bilateral cyber norms agreement",
            "Successful takedown of a major state group",
            "Conflict de-escalation reducing operational tempo",
        ),
    ),
    CompoundPattern(
        id="critical-infra-attack",
        topics=("cyberattack", "energy-transition", "supply-chain"),
        min_topics=2,
        boost_factor=2.2,
        name="Critical Infrastructure Attack",
        prediction="Infrastructure vulnerability exposure rising",
        key_judgments=(
            "Energy and logistics systems are being actively targeted",
            "Newly connected grid assets widen the attack surface",
            "Operational disruption is more likely than data theft",
        ),
        indicators=(
            "Ransomware incidents at utilities or ports",
            "Advisories on industrial control system flaws",
            "Unexplained outages at energy facilities",
        ),
        confirmation_signals=(
            "Confirmed cyber cause of a physical outage",
            "Emergency directives to infrastructure operators",
            "Insurance claims tied to infrastructure attacks",
        ),
        assumptions=(
            "Operators run legacy systems with known weaknesses",
            "Attackers are motivated by disruption or ransom",
            "Incident reporting remains incomplete",
        ),
        change_triggers=(
            "Mandatory security standards enforced",
            "Arrests of key ransomware operators",
            "Major patching campaign completed",
        ),
    ),
    CompoundPattern(
        id="cyber-financial-attack",
        topics=("cyberattack", "bank-crisis", "credit-stress"),
        min_topics=2,
        boost_factor=2.0,
        name="Cyber-Financial Attack",
        prediction="Financial system cyber vulnerability detected",
        key_judgments=(
            "Cyber incidents at financial firms coincide with credit stress",
            "Confidence shocks could amplify an operational outage",
            "Payment systems are a concentrated point of failure",
        ),
        indicators=(
            "Breaches reported at banks or payment processors",
            "Outages in online banking services",
            "Widening credit spreads",
        ),
        confirmation_signals=(
            "Regulator statement on a systemic cyber event",
            "Temporary suspension of payment or trading systems",
            "Deposit outflows following a breach",
        ),
        assumptions=(
            "Financial institutions share common vendors",
            "Market stress reduces tolerance for disruption",
            "Attackers target high-impact timing",
        ),
        change_triggers=(
            "Swift restoration with no data loss",
            "Central bank liquidity assurances",
            "Attribution and neutralization of the attacker",
        ),
    ),
    CompoundPattern(
        id="energy-weaponization",
        topics=("oil-opec", "sanctions", "russia-ukraine"),
        min_topics=2,
        boost_factor=1.8,
        name="Energy Weaponization",
        prediction="Energy used as geopolitical leverage - price volatility expected",
        key_judgments=(
            "Energy exports are being used as a tool of coercion",
            "Sanctions are reshaping oil trade flows",
            "Producer coordination is aligned with political goals",
        ),
        indicators=(
            "Output cuts announced alongside political statements",
            "New price caps or sanctions on energy exports",
            "Growth of shadow tanker fleets",
        ),
        confirmation_signals=(
            "Supply cut to a specific importing country",
            "Benchmark price divergence between regions",
            "Emergency energy measures in importing states",
        ),
        assumptions=(
            "Importers lack short-term alternatives",
            "Producers can tolerate lower volumes",
            "Sanctions enforcement remains partial",
        ),
        change_triggers=(
            "New supply agreements with alternative producers",
            "Sanctions relief negotiations",
            "Demand collapse reducing producer leverage",
        ),
    ),
    CompoundPattern(
        id="resource-war",
        topics=("rare-earths", "china-tensions", "sanctions"),
        min_topics=2,
        boost_factor=1.7,
        name="Resource War",
        prediction="Critical mineral supply under geopolitical pressure",
        key_judgments=(
            "Critical minerals have become an instrument of statecraft",
            "Export controls are likely to tighten on both sides",
            "Manufacturers face input shortages for advanced technology",
        ),
        indicators=(
            "Export licensing requirements on rare earths or gallium",
            "Western stockpiling announcements",
            "New mining partnerships with third countries",
        ),
        confirmation_signals=(
            "Actual shipment halts reported by manufacturers",
            "Price spikes in mineral spot markets",
            "Production delays for chips or batteries",
        ),
        assumptions=(
            "Processing capacity remains geographically concentrated",
            "Alternative supply takes years to build",
            "Tensions continue to escalate",
        ),
        change_triggers=(
            "Trade agreement including mineral provisions",
            "Major new processing facility online",
            "Relaxation of export controls",
        ),
    ),
    CompoundPattern(
        id="green-transition-shock",
        topics=("energy-transition", "rare-earths", "china-tensions"),
        min_topics=2,
        boost_factor=1.5,
        name="Green Transition Shock",
        prediction="Energy transition supply chain bottleneck forming",
        key_judgments=(
            "Clean energy deployment depends on contested supply chains",
            "Trade friction threatens solar, battery and magnet inputs",
            "Transition targets face delays and cost overruns",
        ),
        indicators=(
            "Tariffs on solar panels or batteries",
            "Lithium and cobalt price volatility",
            "Project cancellations citing component costs",
        ),
        confirmation_signals=(
            "Missed renewable capacity targets",
            "Shortages reported by installers",
            "Subsidy programs revised to favor domestic content",
        ),
        assumptions=(
            "Domestic manufacturing cannot scale quickly",
            "Policy support for the transition continues",
            "Geopolitical rivals dominate key inputs",
        ),
        change_triggers=(
            "Breakthrough in alternative battery chemistry",
            "Trade truce covering clean technology",
            "Large domestic factories reaching production",
        ),
    ),
    CompoundPattern(
        id="food-crisis-spiral",
        topics=("food-security", "extreme-weather", "supply-chain"),
        min_topics=2,
        boost_factor=1.8,
        name="Food Crisis Spiral",
        prediction="Climate-driven food supply disruption accelerating",
        key_judgments=(
            "Weather damage is reducing harvests in key exporters",
            "Logistics bottlenecks are compounding shortages",
            "Import-dependent countries face acute price stress",
        ),
        indicators=(
            "Crop condition downgrades",
            "Grain export restrictions announced",
            "Rising food price index readings",
        ),
        confirmation_signals=(
            "Emergency food aid appeals",
            "Bread or staple price protests",
            "Export bans by multiple producers",
        ),
        assumptions=(
            "Adverse weather persists through the growing season",
            "Stockpiles are below historical averages",
            "Shipping routes remain disrupted",
        ),
        change_triggers=(
            "Bumper harvest in another major region",
            "Export bans lifted",
            "Humanitarian corridors reopened",
        ),
    ),
    CompoundPattern(
        id="climate-migration",
        topics=("extreme-weather", "refugee-crisis", "civil-unrest"),
        min_topics=2,
        boost_factor=1.7,
        name="Climate Migration Pressure",
        prediction="Climate displacement triggering social instability",
        key_judgments=(
            "Weather disasters are forcing large-scale displacement",
            "Host communities are under strain",
            "Migration is becoming a source of political unrest",
        ),
        indicators=(
            "Displacement figures rising after disasters",
            "New refugee camps or border crossings",
            "Protests in receiving regions",
        ),
        confirmation_signals=(
            "Border closures citing migration surges",
            "International appeals for displacement funding",
            "Violence between host and displaced communities",
        ),
        assumptions=(
            "Affected areas cannot recover quickly",
            "Receiving states lack integration capacity",
            "Aid funding remains insufficient",
        ),
        change_triggers=(
            "Large-scale resettlement programs",
            "Reconstruction enabling returns",
            "Regional migration compacts signed",
        ),
    ),
    CompoundPattern(
        id="agricultural-collapse",
        topics=("agriculture", "extreme-weather", "inflation"),
        min_topics=2,
        boost_factor=1.6,
        name="Agricultural Collapse Signal",
        prediction="Crop failures feeding inflation pipeline",
        key_judgments=(
            "Drought and heat are cutting agricultural output",
            "Input costs for farmers remain elevated",
            "Food inflation is likely to outpace headline inflation",
        ),
        indicators=(
            "Drought monitor expansion",
            "Fertilizer price increases",
            "Lower harvest forecasts",
        ),
        confirmation_signals=(
            "Food CPI acceleration",
            "Farm bankruptcies rising",
            "Government emergency agricultural aid",
        ),
        assumptions=(
            "Weather patterns remain unfavorable",
            "Farmers cannot switch crops in time",
            "Import substitution is limited",
        ),
        change_triggers=(
            "Rainfall returning to normal",
            "Fertilizer prices falling",
            "Strong yields in alternate regions",
        ),
    ),
    CompoundPattern(
        id="sovereign-debt-crisis",
        topics=("sovereign-debt", "fed-rates", "credit-stress"),
        min_topics=2,
        boost_factor=2.0,
        name="Sovereign Debt Crisis",
        prediction="Government debt sustainability in question",
        key_judgments=(
            "Higher rates are raising government interest burdens",
            "Bond markets are demanding larger risk premia",
            "Fiscal credibility is under scrutiny",
        ),
        indicators=(
            "Rising long-term bond yields",
            "Credit rating downgrades or negative outlooks",
            "Debt ceiling standoffs",
        ),
        confirmation_signals=(
            "Failed or undersubscribed bond auctions",
            "Central bank intervention in bond markets",
            "Emergency fiscal consolidation announced",
        ),
        assumptions=(
            "Deficits remain large",
            "Rates stay elevated",
            "Political gridlock prevents fiscal reform",
        ),
        change_triggers=(
            "Credible fiscal plan adopted",
            "Rate cuts lowering refinancing costs",
            "Rating upgrade or outlook improvement",
        ),
    ),
    CompoundPattern(
        id="credit-contagion",
        topics=("credit-stress", "bank-crisis", "housing"),
        min_topics=2,
        boost_factor=1.9,
        name="Credit Contagion",
        prediction="Credit stress spreading across sectors",
        key_judgments=(
            "Credit losses are spreading from one sector to others",
            "Lenders are tightening standards broadly",
            "Property is a key channel for contagion",
        ),
        indicators=(
            "Rising default rates in high yield",
            "Tighter lending standards in surveys",
            "Falling property valuations",
        ),
        confirmation_signals=(
            "Large corporate defaults",
            "Bank losses tied to real estate",
            "Credit spreads at multi-year highs",
        ),
        assumptions=(
            "Leverage remains high",
            "Refinancing walls arrive soon",
            "Central banks are slow to ease",
        ),
        change_triggers=(
            "Central bank credit facilities",
            "Improving earnings reducing default risk",
            "Successful refinancing of large maturities",
        ),
    ),
    CompoundPattern(
        id="dedollarization-signal",
        topics=("trade-blocs", "sanctions", "crypto"),
        min_topics=2,
        boost_factor=1.6,
        name="Dedollarization Signal",
        prediction="Alternative payment systems gaining traction",
        key_judgments=(
            "Sanctioned states are building parallel payment rails",
            "Trade blocs are promoting local currency settlement",
            "Digital assets are being tested for cross-border trade",
        ),
        indicators=(
            "BRICS summit statements on payment systems",
            "Bilateral currency swap agreements",
            "Crypto adoption in sanctioned economies",
        ),
        confirmation_signals=(
            "Commodity trades settled outside the dollar",
            "Launch of a cross-border payment platform",
            "Central banks adding non-dollar reserves",
        ),
        assumptions=(
            "Sanctions pressure continues",
            "Bloc members share a motive to reduce dollar exposure",
            "Infrastructure for alternatives matures",
        ),
        change_triggers=(
            "Sanctions relief",
            "Bloc disagreements stalling payment projects",
            "Crypto crackdowns in participating states",
        ),
    ),
    CompoundPattern(
        id="social-tinderbox",
        topics=("civil-unrest", "inflation", "layoffs"),
        min_topics=2,
        boost_factor=1.9,
        name="Social Tinderbox",
        prediction="Economic pain fueling civil unrest risk",
        key_judgments=(
            "Price pressure and job losses are driving public anger",
            "Protests are broadening beyond usual organizers",
            "Governments risk heavy-handed responses",
        ),
        indicators=(
            "Growing protest size and frequency",
            "Strike announcements by major unions",
            "Rising unemployment claims",
        ),
        confirmation_signals=(
            "Nationwide strikes or general strikes",
            "Curfews or emergency measures",
            "Government reshuffles in response to unrest",
        ),
        assumptions=(
            "Economic relief measures are inadequate",
            "Social media accelerates mobilization",
            "Trust in institutions is low",
        ),
        change_triggers=(
            "Major subsidy or wage relief packages",
            "Negotiated settlements with unions",
            "Falling prices easing household strain",
        ),
    ),
    CompoundPattern(
        id="democratic-stress",
        topics=("election", "political-violence", "civil-unrest"),
        min_topics=2,
        boost_factor=1.8,
        name="Democratic Stress",
        prediction="Political institutions under pressure",
        key_judgments=(
            "Electoral disputes are raising the risk of violence",
            "Trust in electoral institutions is eroding",
            "Political actors are rejecting or preemptively disputing results",
        ),
        indicators=(
            "Threats against election officials",
            "Claims of fraud before results are certified",
            "Armed groups at political events",
        ),
        confirmation_signals=(
            "Violent incidents linked to elections",
            "Refusal to certify results",
            "Mass protests contesting outcomes",
        ),
        assumptions=(
            "Polarization remains high",
            "Leaders amplify distrust",
            "Security forces are stretched",
        ),
        change_triggers=(
            "Clear concessions by losing candidates",
            "Court rulings accepted across parties",
            "Cross-party condemnation of violence",
        ),
    ),
    CompoundPattern(
        id="global-protest-wave",
        topics=("civil-unrest", "food-security", "inflation"),
        min_topics=2,
        boost_factor=1.7,
        name="Global Protest Wave",
        prediction="Cost-of-living protests spreading",
        key_judgments=(
            "Food and fuel prices are triggering protests in multiple countries",
            "Unrest is spreading through regional demonstration effects",
            "Import-dependent states are most vulnerable",
        ),
        indicators=(
            "Protests over bread or fuel prices",
            "Subsidy cuts announced by governments",
            "Currency depreciation in emerging markets",
        ),
        confirmation_signals=(
            "Protests in several countries in the same week",
            "Government resignations following unrest",
            "IMF emergency financing requests",
        ),
        assumptions=(
            "Commodity prices stay high",
            "Fiscal space for subsidies is limited",
            "Youth unemployment remains elevated",
        ),
        change_triggers=(
            "Commodity price decline",
            "International food aid packages",
            "Restoration of subsidies",
        ),
    ),
    CompoundPattern(
        id="arms-race-acceleration",
        topics=("arms-race", "nato-defense", "russia-ukraine"),
        min_topics=2,
        boost_factor=1.7,
        name="Arms Race Acceleration",
        prediction="Military spending and procurement surging",
        key_judgments=(
            "European defense budgets are rising sharply",
            "Procurement is prioritizing munitions and air defense",
            "Defense industry capacity is the binding constraint",
        ),
        indicators=(
            "New defense spending pledges",
            "Large arms contracts announced",
            "Conscription debates in member states",
        ),
        confirmation_signals=(
            "Budgets passed above alliance targets",
            "Factory expansions by defense firms",
            "Multi-year munitions contracts signed",
        ),
        assumptions=(
            "The conflict in Ukraine continues",
            "Alliance cohesion remains intact",
            "Public support for defense spending holds",
        ),
        change_triggers=(
            "Peace agreement in Ukraine",
            "Fiscal pressure forcing defense cuts",
            "Arms control negotiations resumed",
        ),
    ),
    CompoundPattern(
        id="multi-domain-conflict",
        topics=("cyberattack", "space-military", "arms-race"),
        min_topics=2,
        boost_factor=2.3,
        name="Multi-Domain Conflict",
        prediction="Warfare expanding across cyber, space, and conventional domains",
        key_judgments=(
            "Military competition is extending into space and cyberspace",
            "Satellites and networks are treated as legitimate targets",
            "Escalation pathways are harder to control across domains",
        ),
        indicators=(
            "Anti-satellite tests or jamming incidents",
            "Cyber operations against military networks",
            "New space force budgets or commands",
        ),
        confirmation_signals=(
            "Attack on a satellite constellation",
            "Coordinated cyber and kinetic operations",
            "Doctrine updates naming space as a warfighting domain",
        ),
        assumptions=(
            "Norms for space conduct remain weak",
            "Attribution of cyber attacks is contested",
            "Rival powers invest heavily in counter-space systems",
        ),
        change_triggers=(
            "Agreement on space debris or ASAT test bans",
            "Cyber norms accord between major powers",
            "Reduced conventional tensions",
        ),
    ),
    CompoundPattern(
        id="escalation-ladder",
        topics=("nuclear", "arms-race", "russia-ukraine", "china-tensions"),
        min_topics=2,
        boost_factor=2.5,
        name="Escalation Ladder",
        prediction="Conflict intensity climbing across theaters",
        key_judgments=(
            "Rivals are climbing successive rungs of escalation",
            "Nuclear and conventional signaling are increasingly linked",
            "Crisis management channels are underused",
        ),
        indicators=(
            "Strategic bomber or submarine deployments",
            "Military exercises near contested borders",
            "Statements lowering thresholds for escalation",
        ),
        confirmation_signals=(
            "Direct clashes between major power forces",
            "Mobilization announcements",
            "Emergency alliance consultations",
        ),
        assumptions=(
            "Leaders believe escalation will compel concessions",
            "Misperception risk is high",
            "Third parties cannot mediate effectively",
        ),
        change_triggers=(
            "Hotline use publicly confirmed",
            "Summit between rival leaders",
            "Mutual force pullbacks",
        ),
    ),
    CompoundPattern(
        id="systemic-fragility",
        topics=("sovereign-debt", "supply-chain", "cyberattack", "extreme-weather"),
        min_topics=3,
        boost_factor=2.5,
        name="Systemic Fragility",
        prediction="Multiple system stress points converging - cascading failure risk",
        key_judgments=(
            "Financial, physical and digital systems are stressed at the same time",
            "Shocks in one system can propagate to others",
            "Buffers across systems are thin",
        ),
        indicators=(
            "Bond market stress alongside logistics disruption",
            "Infrastructure outages during weather events",
            "Cyber incidents at critical suppliers",
        ),
        confirmation_signals=(
            "Cascading outages across sectors",
            "Emergency government coordination bodies activated",
            "Market circuit breakers triggered",
        ),
        assumptions=(
            "Interdependencies are poorly mapped",
            "Fiscal space to respond is limited",
            "Stress events overlap in time",
        ),
        change_triggers=(
            "Easing of financial conditions",
            "Restoration of logistics capacity",
            "Calm weather season",
        ),
    ),
    CompoundPattern(
        id="polycrisis",
        topics=(
            "civil-unrest",
            "food-security",
            "inflation",
            "extreme-weather",
            "refugee-crisis",
        ),
        min_topics=3,
        boost_factor=3.0,
        name="Polycrisis",
        prediction="Simultaneous crises reinforcing each other - monitor all fronts",
        key_judgments=(
            "Several crises are amplifying one another",
            "Humanitarian needs are outpacing response capacity",
            "Political stability is at risk in vulnerable states",
        ),
        indicators=(
            "Concurrent food, weather and displacement emergencies",
            "Protests linked to living costs",
            "UN appeals exceeding funding",
        ),
        confirmation_signals=(
            "State failure or government collapse",
            "Cross-border spillover of unrest",
            "Emergency international summits",
        ),
        assumptions=(
            "Crises persist for months rather than weeks",
            "Donor fatigue limits aid",
            "Local institutions are weak",
        ),
        change_triggers=(
            "Major international relief effort",
            "Favorable harvests and weather",
            "Political settlement in affected states",
        ),
    ),
]


def get_compound_pattern(pattern_id: str) -> CompoundPattern | None:
    """Get a compound pattern by its ID."""
    for pattern in COMPOUND_PATTERNS:
        if pattern.id == pattern_id:
            return pattern
    return None
