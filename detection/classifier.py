"""Heuristic Email Classifier - blacklist pass followed by feature scoring"""
import logging
import re
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering

logger = logging.getLogger(__name__)

# Any one of these forces a phishing verdict. Order decides which phrase
# the explanation names when several are present.
HIGH_RISK_PHRASES = (
    'verify your account', 'update your payment', 'password reset',
    'security alert', 'urgent action required', 'confirm your identity',
    'account suspended', 'login attempt', 'winner', 'prize',
    'claim your reward', 'invoice due', 'shipping confirmation',
    'unusual activity', 'de-activation', 'confidential information',
    'ssn', 'social security',
)

SUSPICIOUS_PHRASES = (
    'click here', 'unsubscribe', 'limited time offer', 'act now',
    'dear valued customer', 'dear user',
)

URGENCY_PHRASES = ('urgent', 'immediately', 'within 24 hours')

LINK_PATTERN = re.compile(r'<a href|http:|https:')
GENERIC_GREETING_PATTERN = re.compile(r'dear (user|customer|client|member|account holder)')
ANCHOR_TEXT_PATTERN = re.compile(r'>([^<]+)</a>')

PHISHING_THRESHOLD = 3

EMPTY_EXPLANATION = 'Email content is empty.'
HIGH_RISK_EXPLANATION = ('High-risk phrase found: "{phrase}". '
                         'This is a common tactic used in phishing emails.')
PHISHING_EXPLANATION = ('The email exhibits multiple characteristics of a phishing '
                        'attempt, such as urgency and suspicious links.')
SUSPICIOUS_EXPLANATION = ('This email contains some suspicious elements. Please verify '
                          'the sender and be cautious with any links.')
SAFE_EXPLANATION = ('No immediate signs of phishing were detected. As always, remain '
                    'cautious when opening links or attachments.')


@total_ordering
class AnalysisVerdict(Enum):
    SAFE = 'SAFE'
    SUSPICIOUS = 'SUSPICIOUS'
    PHISHING = 'PHISHING'

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    def __lt__(self, other):
        if not isinstance(other, AnalysisVerdict):
            return NotImplemented
        return self.severity < other.severity


_SEVERITY = {
    AnalysisVerdict.SAFE: 0,
    AnalysisVerdict.SUSPICIOUS: 1,
    AnalysisVerdict.PHISHING: 2,
}


@dataclass(frozen=True)
class AnalysisResult:
    verdict: AnalysisVerdict
    explanation: str

    def to_dict(self) -> dict:
        return {'verdict': self.verdict.value, 'explanation': self.explanation}


def find_high_risk_phrase(text_lower: str):
    """Return the first blacklisted phrase (in list order) contained in the text."""
    for phrase in HIGH_RISK_PHRASES:
        if phrase in text_lower:
            return phrase
    return None


def score_features(text_lower: str) -> dict:
    """
    Per-feature score contributions for already lowercased text.
    The keys are suspicious_phrases, link_density, urgency,
    generic_greeting and disguised_links.
    """
    scores = {}

    scores['suspicious_phrases'] = sum(1 for p in SUSPICIOUS_PHRASES if p in text_lower)

    link_count = len(LINK_PATTERN.findall(text_lower))
    if link_count > 4:
        scores['link_density'] = 2
    elif link_count > 1:
        scores['link_density'] = 1
    else:
        scores['link_density'] = 0

    scores['urgency'] = 2 if any(p in text_lower for p in URGENCY_PHRASES) else 0

    scores['generic_greeting'] = 1 if GENERIC_GREETING_PATTERN.search(text_lower) else 0

    # Anchor text without a visible URL hides where the link goes
    disguised = 0
    if 'href' in text_lower and 'unsubscribe' not in text_lower:
        if any('http' not in m.group(0) for m in ANCHOR_TEXT_PATTERN.finditer(text_lower)):
            disguised = 1
    scores['disguised_links'] = disguised

    return scores


def classify(email_text: str) -> AnalysisResult:
    """Classify raw email text as safe, suspicious or phishing."""
    if not email_text or not email_text.strip():
        return AnalysisResult(AnalysisVerdict.SAFE, EMPTY_EXPLANATION)

    text_lower = email_text.lower()

    phrase = find_high_risk_phrase(text_lower)
    if phrase is not None:
        logger.debug("Verdict %s: high-risk phrase %r", AnalysisVerdict.PHISHING.value, phrase)
        return AnalysisResult(AnalysisVerdict.PHISHING,
                              HIGH_RISK_EXPLANATION.format(phrase=phrase))

    features = score_features(text_lower)
    score = sum(features.values())

    if score >= PHISHING_THRESHOLD:
        result = AnalysisResult(AnalysisVerdict.PHISHING, PHISHING_EXPLANATION)
    elif score > 0:
        result = AnalysisResult(AnalysisVerdict.SUSPICIOUS, SUSPICIOUS_EXPLANATION)
    else:
        result = AnalysisResult(AnalysisVerdict.SAFE, SAFE_EXPLANATION)

    logger.debug("Verdict %s: score %d %s", result.verdict.value, score, features)
    return result
