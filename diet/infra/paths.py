from diet.utilities.config import DATA_DIR

# Centralized paths for data files (single source of truth)
PROFILES_FILE = DATA_DIR / 'profiles.json'
APPOINTMENTS_FILE = DATA_DIR / 'appointments.json'
DIET_LISTS_FILE = DATA_DIR / 'diet_lists.json'

__all__ = ['DATA_DIR', 'PROFILES_FILE', 'APPOINTMENTS_FILE', 'DIET_LISTS_FILE']
