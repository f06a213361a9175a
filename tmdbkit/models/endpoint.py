from __future__ import annotations

from typing import Union
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

ParamValue = Union[str, int, float, bool]


def _canonical(value: ParamValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class EndpointRequest(BaseModel):
    """One logical TMDB API call.

    ``params`` never carries the API credential; the pipeline injects it when
    building the live URL so that the identity (and therefore the cache key)
    does not depend on which key was used.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    params: dict[str, ParamValue] = Field(default_factory=dict)
    response_model: type[BaseModel]

    def query_params(self) -> dict[str, str]:
        """Parameters rendered as strings, sorted by key."""
        return {key: _canonical(self.params[key]) for key in sorted(self.params)}

    @property
    def identity(self) -> str:
        """``path`` plus the sorted, urlencoded query string."""
        if not self.params:
            return self.path
        return f"{self.path}?{urlencode(sorted(self.query_params().items()))}"
