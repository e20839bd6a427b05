from pathlib import Path
import os
import sys
import uuid

# Ensure repo root is on sys.path and is the working directory.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
os.chdir(ROOT)

from roundtable.logging import setup_logging
from roundtable.errors import ConfigError
from roundtable.pipeline.orchestrator import _update_impl

if __name__ == '__main__':
    setup_logging()
    run_id = str(uuid.uuid4())
    print('Run', run_id)
    try:
        result = _update_impl(run_id)
    except ConfigError as e:
        print('Config error:', e, file=sys.stderr)
        sys.exit(2)
    except Exception as e:
        print('Fatal error:', e, file=sys.stderr)
        sys.exit(1)
    print('Done:', result.get('status'))
