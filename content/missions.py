"""Mission setups: map size, starting party, and enemy line-up."""

MISSIONS: dict[str, dict] = {
    "merchant_ship_heist": {
        "id": "merchant_ship_heist",
        "name": "The Merchant Ship Heist",
        "description": (
            "Four nights ago... The Marakatas plan a daring midnight raid on a "
            "merchant vessel off the coast of Masuli."
        ),
        "map_width": 20,
        "map_height": 15,
        "environment_type": "ship_deck",
        "objective": "Neutralize merchant crew without sinking the ship",
        "turn_limit": None,
        "player_party": [
            {"character": "lachi", "x": 2, "y": 7},
            {"character": "kona", "x": 3, "y": 7},
            {"character": "reddy", "x": 2, "y": 8},
            {"character": "gopa", "x": 3, "y": 8},
        ],
        "enemies": [
            {
                "name": "Merchant Guard A", "class_name": "Yodha", "level": 3,
                "x": 15, "y": 6,
                "attributes": {
                    "bala": 12, "dakshata": 10, "dhriti": 11,
                    "buddhi": 9, "prajna": 9, "samkalpa": 10,
                },
            },
            {
                "name": "Merchant Guard B", "class_name": "Yodha", "level": 3,
                "x": 16, "y": 8,
                "attributes": {
                    "bala": 11, "dakshata": 11, "dhriti": 12,
                    "buddhi": 8, "prajna": 8, "samkalpa": 9,
                },
            },
            {
                "name": "Ship Captain", "class_name": "Yodha", "level": 4,
                "x": 17, "y": 7,
                "attributes": {
                    "bala": 13, "dakshata": 12, "dhriti": 13,
                    "buddhi": 10, "prajna": 10, "samkalpa": 11,
                },
            },
        ],
    },
    "protecting_lachi": {
        "id": "protecting_lachi",
        "name": "Protecting Lachi",
        "description": (
            "Lachi is hurt and vulnerable. The Marakatas must defend her "
            "while she recovers."
        ),
        "map_width": 18,
        "map_height": 12,
        "environment_type": "ship_cabin",
        "objective": "Protect Lachi for 8 rounds",
        "turn_limit": 8,
        "player_party": [
            {"character": "kona", "x": 5, "y": 5},
            {"character": "reddy", "x": 4, "y": 6},
            {"character": "gopa", "x": 6, "y": 6},
        ],
        "protected_unit": {
            "character": "lachi", "x": 5, "y": 6, "initial_status": "downed",
        },
        "enemies": [
            {"name": "Reinforcement Guard 1", "class_name": "Yodha", "level": 3, "x": 14, "y": 4},
            {"name": "Reinforcement Guard 2", "class_name": "Chara", "level": 3, "x": 14, "y": 8},
        ],
    },
}
