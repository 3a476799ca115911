from pydantic import BaseModel, ConfigDict, computed_field

OptionalStr = str | None


class ParsedName(BaseModel):
    """Fields derived from a package artifact filename."""

    model_config = ConfigDict(frozen=True)

    filename: str
    package: str
    display_package: str
    stem: str
    is_source: bool
    arch: OptionalStr = None

    @computed_field
    @property
    def bucket(self) -> str:
        """First-letter directory the package lives under in the pool."""
        return self.display_package[:1]

    @property
    def is_dbgsym(self) -> bool:
        return self.package != self.display_package
