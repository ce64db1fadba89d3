"""Constants and mappings for the MPG match engine."""

# Formation slots 1-11 are starters, anything above is the bench
STARTER_SLOTS = 11

# Rating given to a starter who did not play (the fictional "Rotaldo")
ROTALDO_RATING = 2.5

# Rating used for a starter expected to play who has no rating yet
DEFAULT_RATING = 5.0

# Home side wins exact ties in the MPG goal cascade
HOME_BONUS = 0.01

# Cascade penalties: first line climbed, then every further line
FIRST_STEP_PENALTY = 1.0
NEXT_STEP_PENALTY = 0.5

# Upstream position codes (numeric and letter forms) -> line index
POSITION_CODES = {
    1: 1,
    2: 2,
    3: 3,
    4: 4,
    'G': 1,
    'D': 2,
    'M': 3,
    'A': 4,
}

# Upstream status codes
STATUS_DID_NOT_PLAY = -1
STATUS_QUESTIONABLE = 2

# Formation code -> (defenders, midfielders, forwards)
COMPOSITIONS = {
    '343': (3, 4, 3),
    '352': (3, 5, 2),
    '433': (4, 3, 3),
    '442': (4, 4, 2),
    '451': (4, 5, 1),
    '532': (5, 3, 2),
    '541': (5, 4, 1),
}

# Substitution types carried by the on-pitch table
SUBSTITUTION_MANDATORY = 'mandatory'
SUBSTITUTION_TACTICAL = 'tactical'

# Prefix for placeholder players filling empty starter slots
ROTALDO_ID_PREFIX = 'rotaldo_'
