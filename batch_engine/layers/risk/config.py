"""
Configuration for the risk classifier.

Scores are integer points summed and clamped to [0, 100].
"""

from batch_engine.app.schemas import DishCategory, EventType, Weather

SCORE_MIN = 0
SCORE_MAX = 100

# Level thresholds: >= HIGH is high, >= MEDIUM is medium, anything below is low
HIGH_RISK_THRESHOLD = 67
MEDIUM_RISK_THRESHOLD = 34

# Spoilage-prone cooked food scores above packaged or stable categories
CATEGORY_BASE_POINTS = {
    DishCategory.MAIN_COURSE: 30,
    DishCategory.NON_VEG_STARTER: 28,
    DishCategory.VEG_STARTER: 22,
    DishCategory.DESSERT: 12,
    DishCategory.DRINKS: 6,
}

PERISHABLE_CATEGORIES = frozenset({
    DishCategory.MAIN_COURSE,
    DishCategory.NON_VEG_STARTER,
    DishCategory.VEG_STARTER,
})

# Volume: portions-per-guest ratio scaled onto this many points
VOLUME_POINTS_MAX = 25

# Heat only affects perishable categories
SUNNY_PERISHABLE_POINTS = 8
TEMPERATURE_BANDS = [  # (min °C, points), checked in order
    (35, 12),
    (30, 8),
]

# Turnout uncertainty, any category
WEATHER_POINTS = {
    Weather.RAINY: 6,
}

GUEST_COUNT_BANDS = [  # (min guests, points), checked in order
    (500, 12),
    (250, 8),
    (100, 4),
]

EVENT_TYPE_POINTS = {
    EventType.SCHOOL_FUNCTION: 12,
    EventType.BIRTHDAY: 10,
    EventType.WEDDING: 6,
    EventType.CORPORATE: 0,
}

# Each dietary requirement shrinks the audience for non-veg starters
DIETARY_NON_VEG_POINTS = 3

# Children eat smaller mains
KID_SHARE_THRESHOLD = 40
KID_MAIN_COURSE_POINTS = 5
