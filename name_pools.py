"""
Name pools and country groups used to make the demo players look plausible.

Pure data plus two lookups; no randomness lives here.
"""

from typing import Dict, List

VIETNAM_NAMES = [
    "Nguyễn Văn An", "Trần Thị Bích", "Lê Quang Huy", "Phạm Minh Tuấn", "Hoàng Anh Khoa",
    "Võ Đức Long", "Bùi Thị Nga", "Đoàn Văn Sơn", "Lâm Thị Hồng", "Đặng Thanh Tùng",
]
ENGLISH_NAMES = [
    "John Smith", "Emma Johnson", "Liam Williams", "Olivia Brown", "Noah Jones",
    "Ava Miller", "Lucas Davis", "Sophia Wilson", "Mason Moore", "Isabella Taylor",
    "Liam O'Brien", "Siobhan O'Connor",
]
SPANISH_NAMES = [
    "Carlos García", "María Rodríguez", "José Martínez", "Ana López", "Luis Hernández",
    "Sofía González", "Diego Pérez", "Lucía Sánchez", "Miguel Ramírez", "Elena Torres",
]
PORTUGUESE_NAMES = ["João Silva", "Maria Santos", "Pedro Oliveira", "Ana Costa", "Lucas Fernandes"]
FRENCH_NAMES = ["Jean Dupont", "Marie Dubois", "Pierre Martin", "Julie Bernard", "Chloé D'Arcy"]
GERMAN_NAMES = ["Hans Müller", "Anna Schmidt", "Karl Fischer", "Jürgen Weiß"]
RUSSIAN_NAMES = ["Ivan Ivanov", "Olga Petrova", "Dmitry Sokolov"]
JAPANESE_NAMES = ["Taro Yamada", "Yuki Sato", "Hiroshi Tanaka"]
CHINESE_NAMES = ["Li Wei", "Wang Fang", "Zhang Lei"]
KOREAN_NAMES = ["Kim Minsoo", "Lee Ji-eun", "Park Joon"]
ARABIC_NAMES = ["Mohammed Ali", "Fatima Zahra", "Ahmed Hassan"]
DEFAULT_NAMES = ["Alex Cooper", "Maya Patel", "Diego Cruz", "Sana Khan", "Oliver King", "Chloe Green"]

ALL_COUNTRIES = [
    "ae", "ar", "at", "au", "be", "bg", "bh", "bo", "br", "by", "ca", "ch", "cl", "cn",
    "co", "cr", "cz", "de", "dk", "do", "dz", "ec", "eg", "es", "fi", "fr", "gb", "gr",
    "gt", "hk", "hn", "hu", "id", "ie", "il", "in", "iq", "it", "jo", "jp", "ke", "kr",
    "kw", "kz", "lb", "lu", "ly", "ma", "mc", "mx", "my", "ng", "ni", "nl", "no", "nz",
    "om", "pa", "pe", "ph", "pl", "pt", "py", "qa", "ro", "ru", "sa", "se", "sg", "sv",
    "sy", "th", "tn", "tr", "tw", "ua", "us", "uy", "ve", "vn", "ye", "za",
]

COUNTRY_GROUPS: Dict[str, List[str]] = {
    "vietnam": ["vn"],
    "english": ["us", "gb", "au", "ca", "nz", "ie", "in", "ph", "za"],
    "spanish": ["es", "mx", "ar", "co", "pe", "ve", "cl", "ec", "uy", "py", "bo", "do",
                "cr", "pa", "gt", "hn", "ni", "sv"],
    "portuguese": ["br", "pt"],
    "french": ["fr", "be", "ch", "lu", "mc"],
    "german": ["de", "at", "ch", "lu"],
    "russian": ["ru", "by", "ua", "kz"],
    "japanese": ["jp"],
    "chinese": ["cn", "tw", "hk", "sg"],
    "korean": ["kr"],
    "arabic": ["sa", "ae", "eg", "iq", "jo", "lb", "sy", "om", "qa", "kw", "bh", "ye",
               "ma", "dz", "tn", "ly"],
    "default": ALL_COUNTRIES,
}

# Country code -> name pool. The first group listing a country wins, so
# "ch" and "lu" get French names.
_POOL_BY_GROUP = {
    "vietnam": VIETNAM_NAMES,
    "english": ENGLISH_NAMES,
    "spanish": SPANISH_NAMES,
    "portuguese": PORTUGUESE_NAMES,
    "french": FRENCH_NAMES,
    "german": GERMAN_NAMES,
    "russian": RUSSIAN_NAMES,
    "japanese": JAPANESE_NAMES,
    "chinese": CHINESE_NAMES,
    "korean": KOREAN_NAMES,
    "arabic": ARABIC_NAMES,
}
_POOL_BY_COUNTRY: Dict[str, List[str]] = {}
for _group, _pool in _POOL_BY_GROUP.items():
    for _code in COUNTRY_GROUPS[_group]:
        if _code == "za":  # mixed pool
            continue
        _POOL_BY_COUNTRY.setdefault(_code, _pool)


def name_pool_for_country(code: str) -> List[str]:
    """Return the display-name pool for a country code (mixed pool if unknown)."""
    pool = _POOL_BY_COUNTRY.get((code or "").lower())
    if pool is None:
        return ENGLISH_NAMES + DEFAULT_NAMES
    return pool


def countries_in_group(group: str) -> List[str]:
    return COUNTRY_GROUPS.get(group) or ALL_COUNTRIES
