import os
import sys

# ``app`` picks its config on import; keep the suite on the in-memory database
# and away from startup seeding.
os.environ['APP_ENV'] = 'testing'
sys.path.append(os.path.dirname(os.path.dirname(__file__)))
