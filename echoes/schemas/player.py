"""Player record - best results per play mode plus lifetime statistics."""

from pydantic import BaseModel, Field

# Default best time, so that any real session beats it.
MAX_TIME_MILLIS = 2**63 - 1


class PlayerRecord(BaseModel):
    username: str = Field(min_length=1, max_length=100, frozen=True)

    # Best results, one slot per play mode
    best_single_score: int = 0
    best_single_time_millis: int = MAX_TIME_MILLIS
    best_sequential_score: int = 0
    best_sequential_time_millis: int = MAX_TIME_MILLIS

    # Epoch milliseconds, oldest first
    login_history: list[int] = Field(default_factory=list)

    # Lifetime statistics
    total_levels_played: int = 0
    total_correct_choices: int = 0
    total_time_millis: int = 0

    def record_session(self, score: int, time_millis: int, sequential: bool) -> bool:
        """Keep the session if it beats the stored best for its mode.

        A higher score always wins; an equal score wins only when strictly
        faster. Returns True when the stored best changed.
        """
        if sequential:
            if score > self.best_sequential_score or (
                score == self.best_sequential_score
                and time_millis < self.best_sequential_time_millis
            ):
                self.best_sequential_score = score
                self.best_sequential_time_millis = time_millis
                return True
        else:
            if score > self.best_single_score or (
                score == self.best_single_score
                and time_millis < self.best_single_time_millis
            ):
                self.best_single_score = score
                self.best_single_time_millis = time_millis
                return True
        return False

    @property
    def best_score(self) -> int:
        return max(self.best_single_score, self.best_sequential_score)

    @property
    def best_time_millis(self) -> int:
        """Time of the mode holding the best score; the faster one on a tie."""
        if self.best_sequential_score > self.best_single_score:
            return self.best_sequential_time_millis
        if self.best_single_score > self.best_sequential_score:
            return self.best_single_time_millis
        return min(self.best_single_time_millis, self.best_sequential_time_millis)

    def record_login(self, timestamp: int) -> None:
        self.login_history.append(timestamp)

    @property
    def last_login(self) -> int | None:
        return self.login_history[-1] if self.login_history else None

    def update_statistics(self, levels_played: int, correct_choices: int, time_millis: int) -> None:
        self.total_levels_played += levels_played
        self.total_correct_choices += correct_choices
        self.total_time_millis += time_millis

    @property
    def accuracy(self) -> float:
        """Correct choices as a percentage of levels played."""
        if self.total_levels_played == 0:
            return 0.0
        return self.total_correct_choices / self.total_levels_played * 100

    @property
    def average_time_per_level(self) -> float:
        """Average seconds spent per level."""
        if self.total_levels_played == 0:
            return 0.0
        return self.total_time_millis / self.total_levels_played / 1000.0
