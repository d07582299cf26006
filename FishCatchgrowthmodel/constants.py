# -*- coding: utf-8 -*-
FIRST_YEAR, LAST_YEAR = 1950, 2012    # span of the published series
EXP_PHASE_YEARS = 40              # early years treated as ~exponential when seeding
TONNES_PER_MT = 1.0e6             # raw metric tons -> million tonnes
MAXFEV = 10000
MIN_SEED_R2 = 0.8                 # weaker early-phase regressions are flagged
FAR_FROM_SEED_RATIO = 3.0         # estimate/seed outside [1/r, r] is flagged

YEAR, WILD, FARMED, TOTAL = 'Year', 'Wild_Catch_Mt', 'Farmed_Mt', 'Total_Mt'
T_OFFSET, LOG_WILD = 't', 'Log_Wild_Catch'
VOLUME_COLUMNS = (WILD, FARMED, TOTAL)

# normalized header -> canonical column
HEADER_ALIASES = {
    'year': YEAR,
    'wild_catch': WILD, 'wild': WILD, 'catch': WILD, 'wild_fish_catch': WILD,
    'fish_farming': FARMED, 'farmed': FARMED, 'farmed_fish': FARMED, 'aquaculture': FARMED,
    'total_production': TOTAL, 'total': TOTAL, 'total_fish_production': TOTAL,
}
