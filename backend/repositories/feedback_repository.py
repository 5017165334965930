from typing import Any, Dict

from config import Settings
from supabase_client import get_supabase

TABLE_NAME = "feedback"


def insert_feedback(record: Dict[str, Any], *, settings: Settings) -> Dict[str, Any]:
    response = get_supabase(settings).table(TABLE_NAME).insert(record).execute()
    if not response.data:
        raise RuntimeError("Failed to store feedback")
    return response.data[0]
