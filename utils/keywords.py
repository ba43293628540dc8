"""
Shared keyword tables for topic classification of article titles.

All entries are lowercase substrings; matching is a plain containment test.
"""

AI_KEYWORDS = ["ai", "artificial intelligence", "chatgpt", "openai", "machine learning"]

SECURITY_KEYWORDS = ["security", "hack", "breach", "cyber"]

BIG_TECH_KEYWORDS = ["google", "apple", "microsoft", "meta", "amazon"]

STARTUP_KEYWORDS = ["startup", "funding", "raises", "venture"]

CLOUD_KEYWORDS = ["cloud", "aws", "azure", "gcp", "kubernetes"]

CRYPTO_KEYWORDS = ["crypto", "bitcoin"]

TESLA_MUSK_KEYWORDS = ["tesla", "musk"]

# Narrower lists used by the fallback insight domains
INSIGHT_AI_KEYWORDS = ["ai", "chatgpt", "openai", "machine learning"]

CATEGORY_SECTION_AI_KEYWORDS = ["ai"]

CATEGORY_SECTION_SECURITY_KEYWORDS = ["security", "hack"]
