"""First-aid catalog: the fixed vocabulary of items the engine can recognize.

Green: "Take!" (very useful)
Orange: "Take if have space!" (could help)
Red: "Leave behind!" (not helpful / unsafe)

Entries are matched in declaration order, so order matters: an earlier entry
wins over a later one when both hint at the same raw label.
"""
from __future__ import annotations
from typing import Dict, Optional, Tuple

from .entities import CatalogItem, Priority

G, O, R = Priority.GREEN, Priority.ORANGE, Priority.RED


def _item(key, label, priority, synonyms, hints=(), notes=""):
    return CatalogItem(
        key=key,
        label=label,
        priority=priority,
        synonyms=tuple(s.lower() for s in synonyms),
        detector_hints=tuple(h.lower() for h in hints),
        notes=notes,
    )


FIRST_AID_CATALOG: Tuple[CatalogItem, ...] = (
    # --- GREEN (highly useful) ---
    _item('clean_cloth', 'Clean cloth / towel', G,
          ['cloth', 'towel', 'dish towel', 'rag', 'microfiber'],
          ['towel', 'cloth', 'rag'],
          'Pressure bandage / wound cover (if clean).'),
    _item('plastic_wrap', 'Plastic wrap', G,
          ['cling wrap', 'saran wrap', 'plastic wrap'],
          ['plastic wrap', 'cling film', 'wrap'],
          'Occlusive dressing for burns/wounds (do not wrap tightly on burns).'),
    _item('zip_bag', 'Zip bag (for cold pack)', G,
          ['ziploc', 'zip bag', 'resealable bag', 'freezer bag'],
          ['plastic bag', 'zip bag', 'ziploc'],
          'Ice pack with cold water/ice; general storage.'),
    _item('rubber_gloves', 'Rubber/Nitrile gloves', G,
          ['gloves', 'nitrile', 'latex'],
          ['glove'],
          'Barrier protection.'),
    _item('saline_water', 'Clean water / saline', G,
          ['water', 'water bottle', 'bottle of water', 'saline'],
          ['bottle', 'water bottle'],
          'Irrigation for wounds/eyes; hydration.'),
    _item('canned_food', 'Canned food', G,
          ['canned', 'can of beans', 'can of soup', 'tin food'],
          ['can', 'tin'],
          'High shelf-life calories.'),
    _item('dry_food', 'Dry food (rice/pasta/grains)', G,
          ['rice', 'pasta', 'noodles', 'oats', 'flour bag (sealed food)'],
          ['pasta', 'noodles', 'rice'],
          'Energy source (requires water/heat to cook).'),
    _item('energy_snacks', 'Bars/snacks (high-calorie)', G,
          ['energy bar', 'protein bar', 'granola bar', 'snack bar'],
          ['bar'],
          'Immediate energy.'),
    _item('paper_towels', 'Paper towels (clean)', G,
          ['paper towel', 'kitchen roll', 'napkin'],
          ['paper towel', 'napkin'],
          'Absorbent dressing/pressure (if clean).'),
    _item('tape', 'Tape (medical/athletic or clean masking)', G,
          ['tape', 'athletic tape', 'medical tape', 'masking tape'],
          ['tape'],
          'Securing dressings/splints (avoid duct tape on skin).'),
    _item('bandage', 'Bandages / gauze', G,
          ['bandage', 'bandages', 'gauze', 'bandaid', 'adhesive bandage'],
          ['bandage', 'gauze'],
          'Cover and compress wounds.'),
    _item('trash_bag', 'Clean trash bag', G,
          ['garbage bag', 'trash bag'],
          ['plastic bag'],
          'Barrier/ground cover/poncho/waterproofing.'),
    _item('blanket', 'Blanket', G,
          ['blanket', 'throw'],
          ['blanket'],
          'Prevent hypothermia/shock.'),
    _item('backpack', 'Backpack / bag', G,
          ['backpack', 'bag', 'knapsack', 'rucksack'],
          ['backpack', 'bag'],
          'Carry supplies and organize kit.'),
    _item('pot_pan', 'Pot / pan (cookware)', G,
          ['pot', 'pan', 'saucepan', 'skillet'],
          ['pot', 'pan'],
          'Boil water for sterilization; cook food.'),
    _item('lighter', 'Lighter / matches', G,
          ['lighter', 'matches', 'matchbox'],
          ['lighter', 'matchbox'],
          'Heat, sterilization (flame), signaling. Use safely.'),
    _item('person', 'Person (save every person)', G,
          ['person', 'people', 'human', 'man', 'woman', 'boy', 'girl', 'adult', 'child', 'kid', 'baby'],
          ['person', 'people', 'man', 'woman', 'boy', 'girl', 'face', 'human'],
          'Human life has highest priority: alert, assist, and evacuate.'),

    # --- SHARP OBJECTS (take) ---
    _item('knife', 'Knives / sharp blades', G,
          ['knife', 'chef knife', 'blade', 'paring knife'],
          ['knife'],
          'Cutting clothing/bandage, utility, protection. Handle carefully.'),
    _item('scissors', 'Scissors', G,
          ['scissor', 'kitchen scissors', 'shears'],
          ['scissors'],
          'Cut dressings/clothes precisely.'),
    _item('can_opener', 'Can opener', G,
          ['can opener', 'tin opener'],
          ['can opener'],
          'Access to canned food (calories!).'),
    _item('fork', 'Forks / pointed cutlery', G,
          ['fork', 'forks'],
          ['fork'],
          'Improvised tool; can assist with dressing manipulation.'),
    _item('multitool', 'Multitool (with blade)', G,
          ['multitool', 'leatherman', 'swiss army knife'],
          ['multitool'],
          'Versatile: cutting, gripping, small fixes.'),

    # --- ORANGE (useful if space allows; electronics, utilities) ---
    _item('elastic_band', 'Elastic band / hair tie', O,
          ['elastic band', 'rubber band', 'hair tie'],
          ['rubber band'],
          'Securing bandages/splints (not as tourniquet).'),
    _item('rigid_board', 'Cutting board / tray (splint base)', O,
          ['cutting board', 'tray', 'baking sheet'],
          ['cutting board', 'tray'],
          'Improvised splint/backing; pad edges.'),
    _item('tongs_tweezers', 'Tongs / tweezers', O,
          ['tongs', 'tweezers'],
          ['tongs', 'tweezer'],
          'Grasping without hands; clean before use.'),
    _item('laptop', 'Laptop / tablet', O,
          ['laptop', 'tablet', 'ipad', 'computer'],
          ['laptop', 'tablet'],
          'Information access; bulky but useful.'),
    _item('radio', 'Radio / walkie talkie', O,
          ['radio', 'walkie talkie', 'transmitter'],
          ['radio', 'walkie talkie'],
          'Emergency communication (power-dependent).'),
    _item('phone', 'Phone / smartphone', O,
          ['phone', 'smartphone', 'cellphone', 'mobile'],
          ['phone', 'cell phone'],
          'Navigation/communication if power exists.'),
    _item('battery_pack', 'Battery / power bank', O,
          ['battery', 'power bank', 'portable charger'],
          ['battery', 'powerbank'],
          'Portable power for devices.'),

    # --- RED (leave behind / not advised) ---
    _item('cooking_oil', 'Cooking oil', R,
          ['oil', 'olive oil', 'vegetable oil'],
          ['bottle', 'oil bottle'],
          'Do NOT apply to burns/wounds.'),
    _item('flour_powder', 'Flour / powders', R,
          ['flour', 'cornstarch', 'powder'],
          ['flour'],
          'Not for bleeding; can contaminate wounds.'),
    _item('string_tourniquet', 'Cords/belts as tourniquet', R,
          ['belt', 'cord', 'string'],
          ['belt'],
          'Improvised tourniquets can cause harm if untrained.'),
    _item('mouse', 'Computer mouse', R,
          ['mouse', 'computer mouse'],
          ['mouse'],
          'No use without computer or power.'),
    _item('keyboard', 'Keyboard', R,
          ['keyboard'],
          ['keyboard'],
          'Completely useless without power.'),
    _item('book', 'Books / magazines', R,
          ['book', 'novel', 'magazine'],
          ['book'],
          'Entertainment only; dead weight.'),
    _item('decor', 'Decorations / ornaments', R,
          ['decor', 'decoration', 'ornament', 'vase', 'painting', 'frame'],
          ['decor', 'ornament', 'frame'],
          'No survival value.'),
    _item('furniture', 'Furniture / chairs / tables', R,
          ['chair', 'table', 'sofa', 'desk', 'couch', 'bed'],
          ['chair', 'sofa', 'table', 'desk', 'couch'],
          'Too heavy, impractical.'),
    _item('curtains', 'Curtains / drapes', R,
          ['curtain', 'drape'],
          ['curtain'],
          'Bulky, no essential use.'),
    _item('clock', 'Clock / wall clock', R,
          ['clock', 'alarm clock', 'wall clock'],
          ['clock'],
          'No use beyond decoration.'),
    _item('tv', 'Television / monitor', R,
          ['tv', 'television', 'monitor', 'screen'],
          ['tv', 'monitor'],
          'Heavy, power-dependent, useless.'),
    _item('fan', 'Electric fan', R,
          ['fan'],
          ['fan'],
          'Power-dependent comfort only.'),
    _item('plate', 'Plates / dishes', R,
          ['plate', 'dish', 'mug', 'cup'],
          ['plate', 'mug', 'cup'],
          'Low utility; fragile.'),
    _item('game', 'Games / consoles / entertainment', R,
          ['game', 'board game', 'console', 'controller', 'toy'],
          ['controller', 'toy'],
          'Entertainment only.'),
    _item('mirror', 'Mirror', R,
          ['mirror'],
          ['mirror'],
          'Fragile and heavy.'),
    _item('painting', 'Painting / wall art', R,
          ['painting', 'poster', 'art', 'frame'],
          ['painting', 'poster'],
          'Decoration only.'),
    _item('pillow', 'Pillows / cushions', R,
          ['pillow', 'cushion'],
          ['pillow', 'cushion'],
          'Comfort item, not essential.'),
)

_BY_KEY: Dict[str, CatalogItem] = {it.key: it for it in FIRST_AID_CATALOG}


def get_item(key: str) -> Optional[CatalogItem]:
    return _BY_KEY.get(key)


def categorize(raw_label: str) -> Tuple[Priority, Optional[CatalogItem]]:
    """Map a free-form detector label onto the catalog.

    Detector hints are scanned first, then synonyms, both as substrings of the
    lowercased label and in declaration order. Anything unmatched is RED with
    no item so it still gets surfaced.
    """
    text = (raw_label or "").lower()
    for it in FIRST_AID_CATALOG:
        if any(h in text for h in it.detector_hints):
            return it.priority, it
    for it in FIRST_AID_CATALOG:
        if any(s in text for s in it.synonyms):
            return it.priority, it
    return Priority.RED, None
