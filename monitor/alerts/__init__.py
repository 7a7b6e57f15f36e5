"""
Alerting on newly appearing signals.
"""

from monitor.alerts.engine import ECON_THRESHOLDS, AlertEngine, AlertPopup

__all__ = ["AlertEngine", "AlertPopup", "ECON_THRESHOLDS"]
