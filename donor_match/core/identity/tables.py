"""
Static lookup tables used by the donor matching logic.

Everything here is built once at import time and is read-only afterwards:
tuples, frozensets, mapping proxies and compiled patterns only.
"""

from __future__ import annotations

import re
from types import MappingProxyType


# Minimum meaningful length of a name, by script
MIN_LENGTH_CJK = 2
MIN_LENGTH_LATIN = 4

# Minimum length of a retained core name segment
MIN_CORE_LENGTH = 2

# Phrases removed wherever they occur. They vary between sources without
# changing who the donor is. Longer phrases come first so that
# "股份有限公司" is removed before "有限公司" can split it.
STRIP_PHRASES: tuple[str, ...] = (
    # Honorifics and family markers
    "藝人", "先生", "小姐", "女士", "夫婦", "夫妇", "一家",
    # Conjunctions and punctuation
    "及", "與", "与", "和", "、", "/", "／", ",", "，",
    "（", "）", "(", ")", "「", "」", '"', "“", "”",
    # Legal-entity and organization suffixes
    "股份有限公司", "有限公司", "limited", "ltd.", "ltd",
    "集團", "集团", "group",
    "基金會", "基金会", "foundation",
    "慈善", "charity",
    "控股", "holdings",
    "國際", "国际", "international",
    "香港", "hong kong", "hk",
    "度",  # "361度集團" vs "361集團"
    "零售",  # "DFI零售集團" vs "DFI集團"
    # Headline action words
    "啟動", "緊急", "宣布", "承諾", "累計", "首批", "追加",
    # Amount words
    "萬元", "人民幣", "物資", "元",
    # Financial institution suffixes
    "證券", "銀行", "银行",
)

# Exact values that are too common to identify a donor on their own
GENERIC_NAMES: frozenset[str] = frozenset(
    {
        # Jurisdictions
        "中國", "中国", "香港", "台灣", "台湾",
        # Common single-character surnames
        "李", "張", "陳", "王", "黃", "林", "劉", "吳", "周", "鄭",
        # Structural nouns
        "藝人", "先生", "小姐", "女士", "夫婦", "一家",
        "集團", "集团", "公司", "基金", "銀行", "银行",
        "捐", "捐款", "捐贈", "捐赠",
    }
)

# Organization names that some sources print with a character missing
ORG_ALIASES: MappingProxyType[str, str] = MappingProxyType(
    {
        "紅十字總會": "紅十字會總會",
        "红十字总会": "红十字会总会",
    }
)

# Separators between co-donors in a combined name
SEPARATOR_PATTERN = re.compile(r"[、/／,，;；及與与和\s]+")

# Stock codes and other bracketed numbers, e.g. "(0384)" or "（0384）"
NUMERIC_CODE_PATTERN = re.compile(r"\s*[(（\[【]\s*\d+\s*[)）\]】]\s*")

# CJK Unified Ideographs and Extension A
CJK_PATTERN = re.compile(r"[㐀-䶿一-鿿]")

WHITESPACE_PATTERN = re.compile(r"\s+")


def _phrase_pattern(phrase: str) -> str:
    # "hong kong" also matches "hong  kong" and "hongkong"
    return r"\s*".join(re.escape(word) for word in phrase.split(" "))


STRIP_PATTERN = re.compile(
    "|".join(_phrase_pattern(phrase) for phrase in STRIP_PHRASES),
    flags=re.IGNORECASE,
)
