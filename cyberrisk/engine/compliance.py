"""
Compliance Gap Analyzer
=======================
Maps the regulatory frameworks a client selected to a fixed gap record
(coverage, missing controls, priority) per framework.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Sequence

from cyberrisk.util.types import Response
from cyberrisk.engine.catalog import COMPLIANCE_QUESTION_ID
from cyberrisk.engine.responses import selected_options

logger = logging.getLogger(__name__)


class GapPriority(Enum):
    """How urgently a framework gap should be closed"""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass
class ComplianceGap:
    """Gap record for one selected framework"""
    framework: str
    coverage_percent: int
    missing_controls: List[str] = field(default_factory=list)
    priority: GapPriority = GapPriority.MEDIUM

    def to_dict(self) -> Dict[str, Any]:
        return {
            'framework': self.framework,
            'coveragePercent': self.coverage_percent,
            'missingControls': list(self.missing_controls),
            'priority': self.priority.value,
        }


class ComplianceGapAnalyzer:
    """Look up compliance gaps for selected frameworks"""

    # framework id -> (display name, coverage %, missing controls, priority)
    GAP_TABLE = {
        'gdpr': {
            'framework': 'GDPR',
            'coverage': 45,
            'missing': ['Data Protection Impact Assessments', 'Breach Notification Process',
                        'Records of Processing Activities', 'Data Subject Rights Handling'],
            'priority': GapPriority.HIGH,
        },
        'nis2': {
            'framework': 'NIS2 Directive',
            'coverage': 30,
            'missing': ['Incident Reporting (24h/72h)', 'Supply Chain Security',
                        'Management Accountability', 'Business Continuity Planning'],
            'priority': GapPriority.HIGH,
        },
        'iso27001': {
            'framework': 'ISO 27001',
            'coverage': 55,
            'missing': ['Information Security Management System', 'Risk Treatment Plan',
                        'Internal Audit Programme', 'Statement of Applicability'],
            'priority': GapPriority.MEDIUM,
        },
        'pci-dss': {
            'framework': 'PCI DSS',
            'coverage': 40,
            'missing': ['Cardholder Data Environment Segmentation', 'Quarterly ASV Scans',
                        'File Integrity Monitoring', 'Key Management Procedures'],
            'priority': GapPriority.HIGH,
        },
        'sox': {
            'framework': 'SOX',
            'coverage': 60,
            'missing': ['IT General Controls Testing', 'Change Management Evidence',
                        'Segregation of Duties'],
            'priority': GapPriority.MEDIUM,
        },
        'hipaa': {
            'framework': 'HIPAA',
            'coverage': 35,
            'missing': ['ePHI Risk Analysis', 'Business Associate Agreements',
                        'Access Audit Controls', 'Contingency Plan'],
            'priority': GapPriority.HIGH,
        },
        'cyber-essentials': {
            'framework': 'Cyber Essentials',
            'coverage': 70,
            'missing': ['Secure Configuration Baseline', 'Patch Management Within 14 Days'],
            'priority': GapPriority.LOW,
        },
        'nist': {
            'framework': 'NIST Framework',
            'coverage': 50,
            'missing': ['Asset Inventory', 'Continuous Monitoring',
                        'Recovery Planning', 'Supply Chain Risk Management'],
            'priority': GapPriority.MEDIUM,
        },
    }

    FALLBACK = {
        'coverage': 50,
        'missing': ['Security Framework', 'Monitoring', 'Documentation'],
        'priority': GapPriority.MEDIUM,
    }

    def gap_for(self, framework_id: str) -> ComplianceGap:
        """Gap record for one framework id; unknown ids get the generic fallback"""
        entry = self.GAP_TABLE.get(framework_id)
        if entry is None:
            logger.debug(f"No gap table entry for '{framework_id}', using fallback")
            return ComplianceGap(
                framework=framework_id.upper(),
                coverage_percent=self.FALLBACK['coverage'],
                missing_controls=list(self.FALLBACK['missing']),
                priority=self.FALLBACK['priority'],
            )
        return ComplianceGap(
            framework=entry['framework'],
            coverage_percent=entry['coverage'],
            missing_controls=list(entry['missing']),
            priority=entry['priority'],
        )

    def analyze(self, responses: Sequence[Response]) -> List[ComplianceGap]:
        """One gap per selected framework, in selection order. 'none' is not a framework."""
        frameworks = [f for f in selected_options(responses, COMPLIANCE_QUESTION_ID) if f != 'none']
        return [self.gap_for(f) for f in frameworks]


def analyze_compliance_gaps(responses: Sequence[Response]) -> List[ComplianceGap]:
    return ComplianceGapAnalyzer().analyze(responses)
