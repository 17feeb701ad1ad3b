"""Content schemas - leaders, their levels and the two choices of each level."""

from pydantic import BaseModel, Field


class Choice(BaseModel):
    """One answer option. `historical` marks the decision actually taken."""
    text: str
    historical: bool = False

    model_config = {"frozen": True}


class Level(BaseModel):
    number: int
    description: str
    choices: list[Choice] = Field(min_length=2, max_length=2)
    summary: str = ""  # shown after the player answers

    model_config = {"frozen": True}

    def choice_at(self, index: int) -> Choice | None:
        """Return the choice at a 1-based index, or None if there is none."""
        if 1 <= index <= len(self.choices):
            return self.choices[index - 1]
        return None

    def historical_choice(self) -> Choice | None:
        """First choice flagged historical, or None for a malformed level."""
        return next((c for c in self.choices if c.historical), None)

    @property
    def is_well_formed(self) -> bool:
        return len(self.choices) == 2 and sum(c.historical for c in self.choices) == 1


class Leader(BaseModel):
    name: str
    backstory: str = ""
    levels: list[Level] = Field(default_factory=list)

    model_config = {"frozen": True}
