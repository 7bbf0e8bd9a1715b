"""Character presets for the Marakatas crew."""

ROSTER: dict[str, dict] = {
    "lachi": {
        "name": "Lachi",
        "class_name": "Dhanurdhara",    # Archer / blowpipe user
        "level": 5,
        "attributes": {
            "bala": 11, "dakshata": 14, "dhriti": 12,
            "buddhi": 10, "prajna": 13, "samkalpa": 11,
        },
    },
    "kona": {
        "name": "Kona",
        "class_name": "Yodha",          # Warrior / rower
        "level": 5,
        "attributes": {
            "bala": 15, "dakshata": 11, "dhriti": 13,
            "buddhi": 9, "prajna": 10, "samkalpa": 12,
        },
    },
    "reddy": {
        "name": "Reddy",
        "class_name": "Chara",          # Scout / shield user
        "level": 5,
        "attributes": {
            "bala": 12, "dakshata": 13, "dhriti": 14,
            "buddhi": 10, "prajna": 11, "samkalpa": 10,
        },
    },
    "gopa": {
        "name": "Gopa",
        "class_name": "Yodha",
        "level": 4,
        "attributes": {
            "bala": 14, "dakshata": 10, "dhriti": 12,
            "buddhi": 8, "prajna": 9, "samkalpa": 11,
        },
    },
}
