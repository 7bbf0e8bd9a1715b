"""Built-in ability table and per-class ability sets."""

ABILITY_DATA: list[dict] = [
    {
        "id": "basic_move",
        "name": "Move",
        "description": "Move up to your remaining Speed on the battlefield",
        "action_type": "free",
        "target_type": "ground",
        "effect_type": "teleport",
        "range": "speed",
    },
    # Dhanurdhara (blowpipe specialist)
    {
        "id": "blowpipe_shot",
        "name": "Blowpipe Shot",
        "description": "Fire a dart from blowpipe at a target",
        "action_type": "action",
        "target_type": "enemy",
        "effect_type": "damage",
        "damage_dice": "1d8",
        "damage_attribute": "dakshata",
        "range": 8,
    },
    {
        "id": "rapid_fire",
        "name": "Rapid Fire",
        "description": "Fire multiple darts in quick succession",
        "action_type": "action",
        "target_type": "enemy",
        "effect_type": "damage",
        "damage_dice": "2d6",
        "damage_attribute": "dakshata",
        "range": 6,
        "resource_type": "tapas",
        "resource_cost": 3,
    },
    {
        "id": "precision_shot",
        "name": "Precision Shot",
        "description": "A carefully aimed shot for increased accuracy and damage",
        "action_type": "bonus_action",
        "target_type": "enemy",
        "effect_type": "damage",
        "damage_dice": "1d10+2",
        "damage_attribute": "dakshata",
        "range": 10,
        "resource_type": "maya",
        "resource_cost": 2,
        "requirements": {"min_prajna": 12},
    },
    {
        "id": "scatter_shot",
        "name": "Scatter Shot",
        "description": "Fire darts in an area to hit multiple targets",
        "action_type": "action",
        "target_type": "ground",
        "effect_type": "damage",
        "damage_dice": "1d6",
        "damage_attribute": "dakshata",
        "range": 8,
        "effect_radius": 2,
        "resource_type": "tapas",
        "resource_cost": 2,
    },
    # Yodha (warrior)
    {
        "id": "basic_strike",
        "name": "Basic Strike",
        "description": "A straightforward melee attack",
        "action_type": "action",
        "target_type": "enemy",
        "effect_type": "damage",
        "damage_dice": "1d8",
        "damage_attribute": "bala",
        "range": 1,
    },
    {
        "id": "power_attack",
        "name": "Power Attack",
        "description": "A devastating blow that costs a bonus action",
        "action_type": "bonus_action",
        "target_type": "enemy",
        "effect_type": "damage",
        "damage_dice": "2d8+2",
        "damage_attribute": "bala",
        "range": 1,
        "resource_type": "tapas",
        "resource_cost": 3,
    },
    {
        "id": "intimidating_shout",
        "name": "Intimidating Shout",
        "description": "Intimidate enemies in a radius",
        "action_type": "action",
        "target_type": "ground",
        "effect_type": "status",
        "range": 5,
        "effect_radius": 3,
        "resource_type": "tapas",
        "resource_cost": 1,
        "status_effect": "frightened",
    },
    {
        "id": "defensive_stance",
        "name": "Defensive Stance",
        "description": "Enter a defensive position, reducing incoming damage",
        "action_type": "free",
        "target_type": "self",
        "effect_type": "status",
        "status_effect": "defended",
    },
    # Chara (scout / shield)
    {
        "id": "shield_bash",
        "name": "Shield Bash",
        "description": "Bash with shield to damage and push back",
        "action_type": "action",
        "target_type": "enemy",
        "effect_type": "damage",
        "damage_dice": "1d6",
        "damage_attribute": "bala",
        "range": 1,
    },
    {
        "id": "shield_ward",
        "name": "Shield Ward",
        "description": "Raise shield to protect self and nearby allies",
        "action_type": "reaction",
        "target_type": "self",
        "effect_type": "status",
        "effect_radius": 2,
        "resource_type": "tapas",
        "resource_cost": 2,
        "status_effect": "shielded",
    },
    {
        "id": "quick_movement",
        "name": "Quick Movement",
        "description": "Move rapidly across the battlefield",
        "action_type": "bonus_action",
        "target_type": "ground",
        "effect_type": "teleport",
        "range": 6,
        "resource_type": "speed",
    },
    # Shared
    {
        "id": "first_aid",
        "name": "First Aid",
        "description": "Provide medical assistance to restore Prana",
        "action_type": "action",
        "target_type": "ally",
        "effect_type": "heal",
        "damage_dice": "1d8+2",
        "damage_attribute": "buddhi",
        "range": 2,
    },
    {
        "id": "healing_herbs",
        "name": "Healing Herbs",
        "description": "Use medicinal herbs to heal wounds",
        "action_type": "action",
        "target_type": "ally",
        "effect_type": "heal",
        "damage_dice": "2d6+1",
        "damage_attribute": "buddhi",
        "range": 3,
        "resource_type": "maya",
        "resource_cost": 2,
    },
    {
        "id": "tactical_repositioning",
        "name": "Tactical Repositioning",
        "description": "Move to a better position on the battlefield",
        "action_type": "free",
        "target_type": "ground",
        "effect_type": "teleport",
        "range": 5,
        "resource_type": "speed",
    },
]

CLASS_ABILITIES: dict[str, list[str]] = {
    "Dhanurdhara": [    # Archer / marksman
        "basic_move",
        "blowpipe_shot",
        "rapid_fire",
        "precision_shot",
        "scatter_shot",
        "tactical_repositioning",
    ],
    "Yodha": [          # Warrior
        "basic_move",
        "basic_strike",
        "power_attack",
        "intimidating_shout",
        "defensive_stance",
        "first_aid",
    ],
    "Chara": [          # Scout / defender
        "basic_move",
        "shield_bash",
        "shield_ward",
        "quick_movement",
        "tactical_repositioning",
        "first_aid",
    ],
    "Rishi": [          # Mystic / healer
        "basic_move",
        "healing_herbs",
        "tactical_repositioning",
        "first_aid",
    ],
}
