"""Init-logik för paketet *tasks*.

• Laddar projektets .env automatiskt så att konverteraren får
  NOCODE_OUTPUT_PATH, NOCODE_ID_PREFIX m.fl. även när CLI:t
  startas fristående.
"""

from pathlib import Path
from dotenv import load_dotenv, find_dotenv

# Leta upp .env uppåt i katalogträdet, annars försök i repo-roten
_env_path = find_dotenv(usecwd=True)
if not _env_path:
    # Om .env inte hittas, anta att den finns i projektroten (tre steg upp från denna fil)
    _env_path = Path(__file__).resolve().parent.parent.parent / ".env"

# Redan satta env-variabler vinner över .env
load_dotenv(_env_path, override=False)
