from typing import Literal, Mapping

from pydantic import BaseModel, Field

from .recipe import RecipeSummary

SortOrder = Literal["newest", "oldest", "quickest"]
DifficultyFilter = Literal["all", "easy", "medium", "hard"]


class SearchFilters(BaseModel):
    q: str = ""
    difficulty: DifficultyFilter = "all"
    category_ids: list[int] = Field(default_factory=list)
    sort: SortOrder = "newest"

    def to_query_params(self) -> dict[str, str]:
        """
        Address bar form of the filters. Defaults are left out so an
        unfiltered page has a bare URL.
        """
        params: dict[str, str] = {}
        if self.q:
            params["q"] = self.q
        if self.difficulty != "all":
            params["difficulty"] = self.difficulty
        if self.sort != "newest":
            params["sort"] = self.sort
        if self.category_ids:
            params["categories"] = ",".join(str(c) for c in self.category_ids)
        return params

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> "SearchFilters":
        raw_categories = params.get("categories") or ""
        category_ids = [int(c) for c in raw_categories.split(",") if c.strip().isdigit()]
        return cls(
            q=params.get("q") or "",
            difficulty=params.get("difficulty") or "all",
            sort=params.get("sort") or "newest",
            category_ids=category_ids,
        )


class SearchResult(BaseModel):
    items: list[RecipeSummary]
    total: int
    query_string: str
