from typing import Any

from pydantic import RootModel

__all__ = ["DefinitionsFile"]


class DefinitionsFile(RootModel[dict[str, dict[str, dict[str, Any]]]]):
    """JSON file mapping API names to their endpoint definitions."""

    def api_names(self) -> list[str]:
        return list(self.root)
