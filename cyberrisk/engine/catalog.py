"""Question catalog and lookup helpers.

Defines every question the assessment can ask, in presentation order.
The catalog is built once at import time and shared read-only across sessions.
"""

from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from cyberrisk.util.types import (
    Condition, ImpactTier, Option, OptionValue, Question, SelectQuestion,
    SliderQuestion, VisibilityRule,
)

# Bootstrap questions gate everything else and must render before any answer exists
CURRENCY_QUESTION_ID = 'currency-preference'
PROFICIENCY_QUESTION_ID = 'user-proficiency'
BOOTSTRAP_QUESTION_IDS = frozenset({CURRENCY_QUESTION_ID, PROFICIENCY_QUESTION_ID})

CONTROLS_QUESTION_ID = 'current-security-controls'
INCIDENTS_QUESTION_ID = 'security-incidents'
ORG_PROFILE_QUESTION_ID = 'org-profile'
INDUSTRY_QUESTION_ID = 'industry-vertical'
MATURITY_QUESTION_ID = 'cyber-maturity'
COMPLIANCE_QUESTION_ID = 'compliance-needs'
BUDGET_QUESTION_ID = 'budget-flexibility'
URGENCY_QUESTION_ID = 'urgency-timeline'
THREATS_QUESTION_ID = 'threat-priorities'


class Catalog:
    """Immutable, ordered collection of questions with id lookup."""

    def __init__(self, questions: Sequence[Question]):
        self._questions: Tuple[Question, ...] = tuple(questions)
        self._by_id: Dict[str, Question] = {}
        for question in self._questions:
            if question.id in self._by_id:
                raise ValueError(f"Duplicate question id in catalog: {question.id}")
            self._by_id[question.id] = question

    def __iter__(self) -> Iterator[Question]:
        return iter(self._questions)

    def __len__(self) -> int:
        return len(self._questions)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._by_id

    @property
    def questions(self) -> Tuple[Question, ...]:
        return self._questions

    def get(self, question_id: str) -> Optional[Question]:
        """Return the question with this id, or None."""
        return self._by_id.get(question_id)

    def ids(self) -> List[str]:
        return [q.id for q in self._questions]


def _opt(option_id: str, label: str, multiplier: float, impact: str,
         tooltip: str = "", value: Optional[OptionValue] = None) -> Option:
    return Option(
        id=option_id,
        label=label,
        value=option_id if value is None else value,
        risk_multiplier=multiplier,
        impact=ImpactTier(impact),
        tooltip=tooltip,
    )


HIDE_FOR_NOVICE = VisibilityRule(
    hide_if=(Condition(PROFICIENCY_QUESTION_ID, 'equals', 'novice'),)
)


QUESTIONS: List[Question] = [
    SelectQuestion(
        id=CURRENCY_QUESTION_ID,
        title='What currency would you like to see pricing in?',
        description='All pricing estimates will be shown in your preferred currency.',
        required=True,
        weight=0,
        multiple=False,
        novice_friendly=True,
        options=(
            _opt('gbp', 'British Pounds (£)', 0, 'low', 'UK Pounds Sterling'),
            _opt('usd', 'US Dollars ($)', 0, 'low', 'United States Dollars'),
            _opt('eur', 'Euros (€)', 0, 'low', 'European Union Euros'),
            _opt('cad', 'Canadian Dollars (C$)', 0, 'low', 'Canadian Dollars'),
            _opt('aud', 'Australian Dollars (A$)', 0, 'low', 'Australian Dollars'),
        ),
    ),
    SelectQuestion(
        id=PROFICIENCY_QUESTION_ID,
        title='How would you describe your cyber security knowledge?',
        description='This helps us tailor the assessment complexity to your expertise level.',
        required=True,
        weight=0,
        multiple=False,
        novice_friendly=True,
        options=(
            _opt('novice', "I'm new to cyber security", 0, 'low',
                 "You'll see essential, high-level questions focused on business impact"),
            _opt('intermediate', 'I have some experience', 0, 'low',
                 "You'll see most questions, balanced between technical and business"),
            _opt('expert', "I'm a cyber security professional", 0, 'low',
                 "You'll see all questions, including deep technical detail"),
        ),
    ),
    SelectQuestion(
        id=CONTROLS_QUESTION_ID,
        title='Current Security Controls',
        description='Which security controls do you currently have in place?',
        tooltip='Helps us understand your existing security posture more accurately',
        required=True,
        weight=2.0,
        novice_friendly=True,
        options=(
            _opt('endpoint-protection', 'Endpoint Protection (Antivirus/EDR)', -0.3, 'low', 'Reduces malware and endpoint threats'),
            _opt('firewall-configured', 'Properly Configured Firewall', -0.2, 'low', 'Network perimeter protection'),
            _opt('mfa-enabled', 'Multi-Factor Authentication', -0.4, 'low', 'Significantly reduces account compromise'),
            _opt('backup-strategy', 'Regular Backups (Tested)', -0.3, 'low', 'Critical for ransomware recovery'),
            _opt('patch-management', 'Automated Patch Management', -0.3, 'low', 'Reduces vulnerability exposure'),
            _opt('security-monitoring', 'Security Monitoring/SIEM', -0.4, 'low', 'Early threat detection'),
            _opt('employee-training', 'Regular Security Training', -0.2, 'low', 'Reduces human error risks'),
            _opt('incident-response-plan', 'Incident Response Plan', -0.2, 'low', 'Faster recovery from incidents'),
            _opt('vulnerability-scanning', 'Regular Vulnerability Scanning', -0.3, 'low', 'Proactive vulnerability management'),
            _opt('email-security', 'Advanced Email Security', -0.2, 'low', 'Blocks phishing and malware'),
            _opt('network-segmentation', 'Network Segmentation', -0.3, 'low', 'Limits breach impact'),
            _opt('privileged-access', 'Privileged Access Management', -0.4, 'low', 'Controls admin access'),
            _opt('minimal-controls', 'Minimal/Basic Controls Only', 1.5, 'critical', 'High risk exposure'),
        ),
    ),
    SelectQuestion(
        id='data-sensitivity',
        title='Data Sensitivity & Volume',
        description='What types of sensitive data does your organisation handle?',
        tooltip='Different data types have different risk profiles and regulatory requirements',
        required=True,
        weight=1.8,
        novice_friendly=True,
        options=(
            _opt('customer-pii', 'Customer Personal Data (PII)', 1.4, 'high', 'GDPR and privacy law implications'),
            _opt('payment-data', 'Payment Card Data', 1.8, 'critical', 'PCI DSS compliance required'),
            _opt('health-records', 'Health/Medical Records', 1.9, 'critical', 'HIPAA and strict privacy laws'),
            _opt('financial-records', 'Financial Records', 1.6, 'high', 'Financial regulations and SOX'),
            _opt('intellectual-property', 'Intellectual Property/Trade Secrets', 1.5, 'high', 'Competitive advantage at risk'),
            _opt('government-data', 'Government/Classified Data', 2.0, 'critical', 'National security implications'),
            _opt('employee-data', 'Employee HR Data', 1.2, 'medium', 'Employment law and privacy'),
            _opt('business-confidential', 'Business Confidential Data', 1.1, 'medium', 'Competitive information'),
            _opt('public-data-only', 'Mostly Public Data', 0.7, 'low', 'Lower sensitivity profile'),
        ),
    ),
    SelectQuestion(
        id='infrastructure-complexity',
        title='IT Infrastructure Complexity',
        description='Describe your current IT infrastructure setup',
        tooltip='Infrastructure complexity directly impacts security risk and implementation approach',
        required=True,
        weight=1.6,
        visibility=HIDE_FOR_NOVICE,
        options=(
            _opt('cloud-native', 'Cloud-Native (AWS/Azure/GCP)', 1.0, 'medium', 'Modern but needs cloud security expertise'),
            _opt('hybrid-cloud', 'Hybrid Cloud Environment', 1.3, 'medium', 'Complex integration challenges'),
            _opt('on-premise-modern', 'Modern On-Premise Infrastructure', 1.1, 'medium', 'Controlled but needs maintenance'),
            _opt('legacy-systems', 'Legacy Systems (10+ years)', 1.8, 'critical', 'High risk from outdated security'),
            _opt('mixed-environment', 'Mixed Legacy and Modern', 1.4, 'high', 'Integration and compatibility issues'),
            _opt('saas-heavy', 'SaaS-Heavy Environment', 1.1, 'medium', 'Third-party dependency risks'),
            _opt('iot-devices', 'IoT/Connected Devices', 1.5, 'high', 'Expanded attack surface'),
            _opt('mobile-first', 'Mobile-First Operations', 1.2, 'medium', 'Mobile security challenges'),
        ),
    ),
    SelectQuestion(
        id=INCIDENTS_QUESTION_ID,
        title='Previous Security Incidents',
        description='Has your organisation experienced any security incidents in the past 2 years?',
        tooltip='Past incidents indicate current vulnerabilities and help prioritise defenses',
        required=True,
        weight=2.2,
        novice_friendly=True,
        options=(
            _opt('no-incidents', 'No Known Security Incidents', 0.8, 'low', 'Good track record or undetected issues'),
            _opt('phishing-attempts', 'Phishing/Email Attacks', 1.3, 'medium', 'Common attack vector, needs training'),
            _opt('malware-infection', 'Malware/Virus Infections', 1.5, 'high', 'Endpoint security gaps'),
            _opt('data-breach', 'Data Breach/Unauthorized Access', 2.0, 'critical', 'Serious security failure'),
            _opt('ransomware-attack', 'Ransomware Attack', 2.2, 'critical', 'Critical business disruption'),
            _opt('insider-incident', 'Insider Threat Incident', 1.7, 'high', 'Internal controls needed'),
            _opt('ddos-attack', 'DDoS/Service Disruption', 1.4, 'medium', 'Availability and resilience issues'),
            _opt('supply-chain-compromise', 'Vendor/Supply Chain Compromise', 1.8, 'high', 'Third-party risk management needed'),
            _opt('unsure-incidents', 'Unsure/No Monitoring in Place', 1.6, 'high', 'Blind spots in security monitoring'),
        ),
    ),
    SelectQuestion(
        id='company-size-revenue',
        title='Company Size & Annual Revenue',
        description="Help us understand your organization's scale for accurate risk assessment",
        tooltip='Company size affects threat exposure, regulatory requirements, and available resources',
        required=True,
        weight=1.3,
        multiple=False,
        novice_friendly=True,
        options=(
            _opt('micro', 'Micro Business (<£100k revenue)', 0.7, 'low', 'Lower profile but limited security resources'),
            _opt('small', 'Small Business (£100k-£2M)', 0.9, 'medium', 'Growing visibility with basic security needs'),
            _opt('medium', 'Medium Business (£2M-£25M)', 1.2, 'medium', 'Attractive target with complex requirements'),
            _opt('large', 'Large Business (£25M-£100M)', 1.5, 'high', 'High-value target with regulatory scrutiny'),
            _opt('enterprise', 'Enterprise (£100M+)', 1.8, 'critical', 'Prime target with complex global operations'),
        ),
    ),
    SelectQuestion(
        id='geographic-operations',
        title='Geographic Operations',
        description='Where does your organization operate?',
        tooltip='Different regions have different regulatory requirements and threat landscapes',
        required=True,
        weight=1.2,
        visibility=HIDE_FOR_NOVICE,
        options=(
            _opt('uk-only', 'UK Only', 1.0, 'medium', 'UK regulations (GDPR, NIS2, Cyber Essentials)'),
            _opt('eu-operations', 'European Union', 1.3, 'medium', 'GDPR, NIS2, and country-specific requirements'),
            _opt('us-operations', 'United States', 1.4, 'high', 'State privacy laws, sector regulations'),
            _opt('apac-operations', 'Asia-Pacific', 1.2, 'medium', 'Diverse regulatory landscape'),
            _opt('global-operations', 'Global Operations', 1.6, 'high', 'Complex multi-jurisdictional compliance'),
            _opt('emerging-markets', 'Emerging Markets', 1.5, 'high', 'Higher threat environment'),
        ),
    ),
    SelectQuestion(
        id=ORG_PROFILE_QUESTION_ID,
        title='Organisation Profile & Scale',
        description='Help us understand your organisation structure and operational scale',
        tooltip='Organisation size and complexity directly impact cyber security requirements and threat exposure',
        required=True,
        weight=1.2,
        novice_friendly=True,
        options=(
            _opt('startup', 'Startup (1-50 employees)', 0.8, 'low', 'Smaller attack surface but limited resources'),
            _opt('sme', 'SME (51-250 employees)', 1.0, 'medium', 'Growing complexity needs structure'),
            _opt('enterprise', 'Enterprise (250+ employees)', 1.4, 'high', 'Complex infrastructure with many attack vectors'),
            _opt('multinational', 'Multinational Corporation', 1.8, 'critical', 'Global ops face diverse compliance requirements'),
            _opt('remote-first', 'Remote-first Organisation', 1.3, 'medium', 'Distributed workforce adds complexity'),
            _opt('hybrid-model', 'Hybrid Work Model', 1.1, 'medium', 'Mixed environments need broad controls'),
        ),
    ),
    SelectQuestion(
        id='technology-stack',
        title='Primary Technology Stack',
        description='What technology ecosystem does your organization primarily use?',
        tooltip='Technology choices affect security architecture and threat exposure',
        required=True,
        weight=1.4,
        multiple=False,
        visibility=HIDE_FOR_NOVICE,
        options=(
            _opt('microsoft-stack', 'Microsoft Ecosystem (Office 365, Azure, Windows)', 1.0, 'medium', 'Integrated security but high-value target'),
            _opt('google-workspace', 'Google Workspace & Cloud', 0.9, 'low', 'Strong built-in security features'),
            _opt('aws-ecosystem', 'Amazon Web Services Ecosystem', 1.1, 'medium', 'Powerful but complex security model'),
            _opt('open-source-heavy', 'Open Source Heavy', 1.3, 'medium', 'Flexible but requires security expertise'),
            _opt('saas-first', 'SaaS-First Approach', 1.2, 'medium', 'Third-party dependency risks'),
            _opt('custom-developed', 'Custom/In-House Development', 1.4, 'high', 'Full control but security responsibility'),
            _opt('legacy-proprietary', 'Legacy Proprietary Systems', 1.8, 'critical', 'Limited security updates and support'),
        ),
    ),
    SelectQuestion(
        id=INDUSTRY_QUESTION_ID,
        title='Industry Vertical',
        description='Select your primary industry sector',
        tooltip='Different industries face unique threat profiles and regulatory requirements',
        required=True,
        weight=1.5,
        multiple=False,
        novice_friendly=True,
        options=(
            _opt('financial', 'Financial Services', 2.0, 'critical', 'High-value target with strict regulations'),
            _opt('healthcare', 'Healthcare & Life Sciences', 1.9, 'critical', 'Patient data under GDPR & HIPAA'),
            _opt('government', 'Government & Public Sector', 1.8, 'critical', 'National security & public data'),
            _opt('technology', 'Technology & Software', 1.6, 'high', 'IP protection & supply chain risks'),
            _opt('manufacturing', 'Manufacturing & Industrial', 1.4, 'high', 'OT/IT convergence risks'),
            _opt('retail', 'Retail & E-commerce', 1.3, 'medium', 'Customer data & payment processing'),
            _opt('education', 'Education', 1.1, 'medium', 'Student data & research IP'),
            _opt('professional', 'Professional Services', 1.0, 'medium', 'Client confidentiality focus'),
            _opt('other', 'Other', 1.0, 'medium', 'Sector-specific risk model'),
        ),
    ),
    SelectQuestion(
        id='industry-specific-threats',
        title='Industry-Specific Security Concerns',
        description='Which industry-specific threats are most concerning for your organization?',
        tooltip='Industry-specific threats require specialized security controls and expertise',
        required=True,
        weight=1.5,
        visibility=VisibilityRule(
            show_if=(Condition(INDUSTRY_QUESTION_ID, 'excludes', 'other'),)
        ),
        options=(
            _opt('financial-fraud', 'Financial Fraud & Money Laundering', 2.0, 'critical', 'Direct financial impact and regulatory scrutiny'),
            _opt('trading-systems', 'Trading System Manipulation', 1.9, 'critical', 'Market manipulation and systemic risk'),
            _opt('patient-data-breach', 'Patient Data Breaches', 1.8, 'critical', 'HIPAA violations and patient privacy'),
            _opt('medical-device-security', 'Medical Device Security', 1.7, 'critical', 'Life-critical system vulnerabilities'),
            _opt('industrial-espionage', 'Industrial Espionage', 1.6, 'high', 'Trade secret and IP theft'),
            _opt('operational-disruption', 'Production Line Disruption', 1.8, 'critical', 'Physical safety and business continuity'),
            _opt('source-code-theft', 'Source Code & IP Theft', 1.7, 'high', 'Competitive advantage loss'),
            _opt('supply-chain-attacks', 'Software Supply Chain Attacks', 1.9, 'critical', 'Downstream customer impact'),
            _opt('payment-fraud', 'Payment Processing Fraud', 1.6, 'high', 'PCI compliance and customer trust'),
            _opt('customer-data-theft', 'Customer Database Theft', 1.5, 'high', 'GDPR fines and reputation damage'),
            _opt('client-confidentiality', 'Client Confidentiality Breaches', 1.4, 'medium', 'Professional liability and trust'),
            _opt('regulatory-reporting', 'Regulatory Reporting Integrity', 1.3, 'medium', 'Compliance and audit requirements'),
            _opt('business-email-compromise', 'Business Email Compromise', 1.4, 'high', 'Financial fraud via email'),
            _opt('cloud-misconfigurations', 'Cloud Security Misconfigurations', 1.3, 'medium', 'Data exposure in cloud services'),
        ),
    ),
    SelectQuestion(
        id=MATURITY_QUESTION_ID,
        title='Cyber Security Programme Maturity',
        description="How would you describe your organisation's current cyber security programme?",
        tooltip='This helps us understand your starting point and recommend appropriate next steps',
        required=True,
        weight=1.8,
        multiple=False,
        novice_friendly=True,
        options=(
            _opt('ad-hoc', 'Ad-hoc (No formal programme)', 2.8, 'critical', 'Individual tools without coordination'),
            _opt('basic', 'Basic (Essential tools only)', 2.3, 'critical', 'Antivirus, firewall, basic controls'),
            _opt('developing', 'Developing (Policies + procedures)', 1.9, 'high', 'Documented processes, regular updates'),
            _opt('managed', 'Managed (Structured programme)', 1.4, 'medium', 'Formal governance, monitoring, metrics'),
            _opt('advanced', 'Advanced (Proactive defence)', 1.0, 'low', 'Threat hunting, advanced analytics'),
            _opt('optimized', 'Optimised (Continuous improvement)', 0.7, 'low', 'Mature programme with automation'),
            _opt('uncertain', 'Uncertain / Needs assessment', 2.4, 'high', 'Current state unknown'),
        ),
    ),
    SelectQuestion(
        id='security-team-capability',
        title='Security Team & Expertise',
        description='What internal security capability does your organization have?',
        tooltip='Internal capability affects service delivery approach and support requirements',
        required=True,
        weight=1.4,
        multiple=False,
        visibility=HIDE_FOR_NOVICE,
        options=(
            _opt('no-security-team', 'No Dedicated Security Personnel', 2.0, 'critical', 'Requires fully managed services'),
            _opt('part-time-security', 'Part-time/Shared Security Responsibility', 1.6, 'high', 'Limited security focus and expertise'),
            _opt('single-security-person', 'One Dedicated Security Person', 1.3, 'medium', 'Single point of failure, needs support'),
            _opt('small-security-team', 'Small Security Team (2-5 people)', 1.0, 'low', 'Good foundation, may need specialization'),
            _opt('mature-security-team', 'Mature Security Team (5+ specialists)', 0.8, 'low', 'Strong internal capability'),
            _opt('ciso-led-team', 'CISO-Led Security Organization', 0.6, 'low', 'Executive-level security leadership'),
        ),
    ),
    SelectQuestion(
        id=COMPLIANCE_QUESTION_ID,
        title='Compliance requirements',
        description='Select all regulatory frameworks that apply to your organisation',
        tooltip='Drives specific controls and audits',
        required=True,
        weight=1.4,
        visibility=HIDE_FOR_NOVICE,
        options=(
            _opt('gdpr', 'GDPR', 1.6, 'high', 'EU data law with heavy fines'),
            _opt('nis2', 'NIS2 Directive', 1.8, 'high', 'Critical infrastructure requirements'),
            _opt('iso27001', 'ISO 27001', 1.2, 'medium', 'International standard'),
            _opt('pci-dss', 'PCI DSS', 1.7, 'high', 'Payment card industry standard'),
            _opt('sox', 'SOX', 1.5, 'medium', 'Financial reporting controls'),
            _opt('hipaa', 'HIPAA', 1.8, 'high', 'US healthcare data law'),
            _opt('cyber-essentials', 'Cyber Essentials', 1.1, 'low', 'UK government certification'),
            _opt('nist', 'NIST Framework', 1.3, 'medium', 'Widely adopted framework'),
            _opt('none', 'No specific requirements', 1.0, 'low', 'Use best practices & risk management'),
        ),
    ),
    SelectQuestion(
        id='audit-frequency',
        title='Audit & Compliance Frequency',
        description='How often does your organization undergo security or compliance audits?',
        tooltip='Audit frequency affects ongoing compliance overhead and documentation requirements',
        required=False,
        weight=1.3,
        multiple=False,
        visibility=VisibilityRule(
            show_if=(Condition(COMPLIANCE_QUESTION_ID, 'excludes', 'none'),)
        ),
        options=(
            _opt('no-audits', 'No Regular Audits', 0.9, 'low', 'Lower compliance overhead'),
            _opt('annual-audits', 'Annual Compliance Audits', 1.2, 'medium', 'Standard compliance requirements'),
            _opt('quarterly-reviews', 'Quarterly Compliance Reviews', 1.4, 'medium', 'High regulatory scrutiny'),
            _opt('continuous-monitoring', 'Continuous Regulatory Monitoring', 1.6, 'high', 'Critical infrastructure or high-risk sector'),
            _opt('multiple-regulators', 'Multiple Regulatory Bodies', 1.8, 'high', 'Complex overlapping requirements'),
        ),
    ),
    SliderQuestion(
        id=BUDGET_QUESTION_ID,
        title='Investment Flexibility',
        description='How flexible is your cyber security investment approach?',
        tooltip='Helps us recommend appropriate service levels',
        required=True,
        weight=1.0,
        novice_friendly=True,
        options=(
            _opt('conservative', 'Conservative', 1.4, 'medium', 'Gradual rollout with ROI validation each phase', value=25),
            _opt('balanced', 'Balanced', 1.0, 'low', 'Balance between cost & risk mitigation', value=50),
            _opt('aggressive', 'Aggressive', 0.7, 'low', 'Rapid deployment of comprehensive controls', value=75),
            _opt('unlimited', 'Risk-driven', 0.5, 'low', 'Budget driven by risk appetite', value=100),
        ),
    ),
    SelectQuestion(
        id='annual-security-budget',
        title='Annual Security Budget',
        description='What is your approximate annual cyber security budget?',
        tooltip='Budget constraints help us recommend appropriate service tiers and implementation approaches',
        required=True,
        weight=1.1,
        multiple=False,
        novice_friendly=True,
        options=(
            _opt('under-10k', 'Under £10,000', 1.4, 'medium', 'Limited budget requires focused priorities'),
            _opt('10k-50k', '£10,000 - £50,000', 1.2, 'low', 'Good foundation budget for SMEs'),
            _opt('50k-100k', '£50,000 - £100,000', 1.0, 'low', 'Comprehensive security programme possible'),
            _opt('100k-500k', '£100,000 - £500,000', 0.9, 'low', 'Enterprise-grade security capabilities'),
            _opt('500k-1m', '£500,000 - £1,000,000', 0.8, 'low', 'Advanced security with dedicated resources'),
            _opt('over-1m', 'Over £1,000,000', 0.7, 'low', 'Mature security organization possible'),
            _opt('no-budget', 'No Dedicated Security Budget', 1.8, 'high', 'High risk due to resource constraints'),
        ),
    ),
    SelectQuestion(
        id=URGENCY_QUESTION_ID,
        title='Implementation timeline',
        description="What's driving your cyber security initiative timeline?",
        tooltip='Helps prioritise services and onboarding approach',
        required=True,
        weight=1.3,
        novice_friendly=True,
        options=(
            _opt('immediate-threat', 'Immediate threat response', 2.0, 'critical', 'Active incident demands urgent action'),
            _opt('compliance-deadline', 'Compliance deadline', 1.8, 'high', 'Fixed audit or regulatory deadline'),
            _opt('board-mandate', 'Board mandate', 1.5, 'medium', 'Executive directive for security improvement'),
            _opt('growth-scaling', 'Business growth/scaling', 1.2, 'medium', 'Support expansion with security foundation'),
            _opt('contract-requirement', 'Contract requirement', 1.4, 'medium', 'Security clauses in client contracts'),
            _opt('strategic-planning', 'Strategic planning', 1.0, 'low', 'Planned roadmap integration'),
            _opt('no-urgency', 'No specific urgency', 0.8, 'low', 'Enhancement without time pressure'),
        ),
    ),
    SelectQuestion(
        id=THREATS_QUESTION_ID,
        title='Top Security Concerns',
        description='Which security threats are you most concerned about? (Select up to 4 that worry you most)',
        tooltip='Helps us prioritise the most relevant security controls for your threat landscape',
        required=True,
        weight=1.6,
        visibility=HIDE_FOR_NOVICE,
        options=(
            _opt('ransomware', 'Ransomware Attacks', 2.1, 'critical', 'Business shutdown, data encryption, ransom demands'),
            _opt('data-breach', 'Data Breaches & Privacy Violations', 1.9, 'critical', 'Customer data theft, GDPR fines, reputation damage'),
            _opt('phishing', 'Phishing & Email Attacks', 1.6, 'high', 'Employee credential theft, initial access vector'),
            _opt('insider-threat', 'Insider Threats', 1.7, 'high', 'Malicious employees, negligent data handling'),
            _opt('supply-chain', 'Vendor/Supply Chain Attacks', 1.8, 'high', 'Third-party compromises affecting your systems'),
            _opt('cloud-security', 'Cloud Security Breaches', 1.5, 'high', 'Misconfigured cloud services, data exposure'),
            _opt('regulatory-compliance', 'Regulatory Non-Compliance', 1.4, 'medium', 'Fines, legal action, business restrictions'),
            _opt('business-disruption', 'Business Continuity Disruption', 1.3, 'medium', 'System outages, productivity loss'),
            _opt('financial-fraud', 'Financial Fraud & Theft', 1.6, 'high', 'Payment fraud, financial system compromise'),
            _opt('ip-theft', 'Intellectual Property Theft', 1.4, 'medium', 'Trade secrets, competitive advantage loss'),
            _opt('reputation-damage', 'Brand & Reputation Damage', 1.2, 'medium', 'Customer trust loss, market impact'),
            _opt('advanced-threats', 'Advanced Persistent Threats (APTs)', 1.9, 'critical', 'Sophisticated, long-term attacks'),
        ),
    ),
    SelectQuestion(
        id='delivery-preferences',
        title='Service Delivery Preferences',
        description='How would you prefer to receive cyber security services?',
        tooltip='Delivery model shapes implementation approach and ongoing management',
        required=True,
        weight=1.1,
        novice_friendly=True,
        options=(
            _opt('fully-managed', 'Fully managed/outsourced', 0.8, 'low', 'Complete operations managed by Hanco Cyber'),
            _opt('hybrid-support', 'Hybrid (in-house + external)', 0.9, 'low', 'Mix of internal team and external expertise'),
            _opt('white-label', 'White-label services', 1.0, 'medium', 'Services delivered under your brand'),
            _opt('consulting-advisory', 'Consulting & advisory', 1.2, 'medium', 'Strategic guidance for your internal team'),
            _opt('staff-augmentation', 'Staff augmentation', 1.1, 'low', 'Embed Hanco experts within your team'),
            _opt('project-based', 'Project-based delivery', 1.0, 'medium', 'Defined deliverables and timelines'),
        ),
    ),
    SelectQuestion(
        id='enterprise-complexity',
        title='Enterprise complexity factors',
        description='Select all factors that apply to your enterprise environment',
        tooltip='Enterprise environments have unique security challenges',
        required=True,
        weight=1.4,
        visibility=VisibilityRule(
            show_if=(
                Condition(ORG_PROFILE_QUESTION_ID, 'includes', 'enterprise'),
                Condition(ORG_PROFILE_QUESTION_ID, 'includes', 'multinational'),
            )
        ),
        options=(
            _opt('multi-cloud', 'Multi-cloud infrastructure', 1.3, 'medium', 'Complex cloud security management'),
            _opt('legacy-systems', 'Legacy systems integration', 1.6, 'high', 'Older systems with security limitations'),
            _opt('mergers-acquisitions', 'Recent M&A activity', 1.5, 'high', 'Integration challenges and security gaps'),
            _opt('global-operations', 'Global operations', 1.4, 'medium', 'Multiple jurisdictions and regulations'),
            _opt('critical-infrastructure', 'Critical infrastructure', 1.8, 'critical', 'High-impact operational technology'),
        ),
    ),
    SelectQuestion(
        id='startup-priorities',
        title='Startup Security Priorities',
        description='What are your main security concerns as a growing startup?',
        tooltip='Startups have unique security needs and constraints',
        required=True,
        weight=1.2,
        visibility=VisibilityRule(
            show_if=(Condition(ORG_PROFILE_QUESTION_ID, 'includes', 'startup'),)
        ),
        options=(
            _opt('investor-requirements', 'Investor security requirements', 1.2, 'medium', 'Due diligence and compliance for funding'),
            _opt('customer-trust', 'Building customer trust', 1.1, 'low', 'Security as competitive advantage'),
            _opt('rapid-scaling', 'Rapid scaling challenges', 1.3, 'medium', 'Security keeping pace with growth'),
            _opt('limited-budget', 'Limited security budget', 1.4, 'medium', 'Cost-effective security solutions'),
            _opt('regulatory-readiness', 'Regulatory readiness', 1.2, 'low', 'Preparing for compliance requirements'),
        ),
    ),
]


DEFAULT_CATALOG = Catalog(QUESTIONS)


def get_question(question_id: str, catalog: Catalog = DEFAULT_CATALOG) -> Question:
    """Get question definition by id. Raises KeyError for unknown ids."""
    question = catalog.get(question_id)
    if question is None:
        raise KeyError(f"Unknown question id: {question_id}")
    return question
