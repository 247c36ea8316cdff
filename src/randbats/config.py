"""Configuration for team generation."""

from pydantic import Field
from pydantic_settings import BaseSettings


class GeneratorConfig(BaseSettings):
    """Tunables shared by every team generator."""

    # Data
    data_dir: str = Field(default="data", description="Directory holding dex and set JSON files")
    potd: str | None = Field(
        default=None, description="Pokemon of the Day species forced into formats with the potd rule"
    )

    # Factory retry policy
    factory_max_depth: int = Field(
        default=12, description="Factory team attempts before quality checks are skipped"
    )
    bss_max_depth: int = Field(
        default=4, description="BSS factory team attempts before quality checks are skipped"
    )
    forced_attempt_limit: int = Field(
        default=50, description="Extra attempts allowed once quality checks are skipped"
    )

    # Team composition caps (scaled by team size / team_size_reference)
    team_size_reference: int = Field(default=6, description="Team size the caps below are written for")
    type_cap: int = Field(default=2, description="Max members sharing one type")
    weakness_cap: int = Field(default=3, description="Max members weak to one type")
    type_combo_cap: int = Field(default=1, description="Max members sharing a type combination")
    monotype_type_combo_cap: int = Field(
        default=2, description="Max members sharing a type combination in monotype teams"
    )
    weakness_threshold: int = Field(
        default=3, description="Factory teams with this many members weak to one type are rejected"
    )

    # Build details
    min_ability_rating: float = Field(default=1, description="Minimum rating for an ability to be picked")
    shiny_odds: int = Field(default=1024, description="One in this many builds is shiny")

    class Config:
        env_prefix = "RANDBATS_"


# Global config instance
generator_config = GeneratorConfig()
