# validator.py

import json
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

from cardwizard.models.deck import Deck, DeckFormatError

SCHEMA_DIR = Path(__file__).resolve().parent.parent / "schemas"


class SchemaValidator:
    def __init__(self, schema_dir: Path = SCHEMA_DIR):
        self.schema_dir = Path(schema_dir)
        self.schema_store = self._load_schemas()

    def _load_schemas(self) -> Dict[str, dict]:
        """Load every .json and key the store by both filename and $id (if present)."""
        store = {}
        for schema_file in self.schema_dir.glob("*.json"):
            schema = json.loads(schema_file.read_text(encoding="utf-8"))
            store[schema_file.name] = schema
            sid = schema.get("$id")
            if sid:
                store[sid] = schema
        return store

    def validate(self, data: dict, schema_name: str = "deck.json") -> Tuple[bool, Optional[str]]:
        """
        Validate `data` against a schema.
        Returns (True, None) on success, or (False, "Error message") for the
        most relevant error.
        """
        schema = self.schema_store.get(schema_name)
        if not schema:
            raise FileNotFoundError(f"Schema '{schema_name}' not found in {self.schema_dir!r}")

        e = best_match(Draft202012Validator(schema).iter_errors(data))
        if e is None:
            return True, None
        # human-friendly path like "cards->0->count"
        path = "->".join(map(str, e.path)) or "(root)"
        return False, f"Validation Error in {path}: {e.message}"


def load_deck(source: Union[str, Path, dict], validator: Optional[SchemaValidator] = None) -> Deck:
    """Read, validate and convert a deck document (a path or an already-parsed dict)."""
    if isinstance(source, dict):
        data = source
    else:
        path = Path(source)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise DeckFormatError(f"{path.name} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise DeckFormatError("Deck document must be a JSON object")

    ok, message = (validator or SchemaValidator()).validate(data)
    if not ok:
        raise DeckFormatError(message)
    return Deck.from_dict(data)
