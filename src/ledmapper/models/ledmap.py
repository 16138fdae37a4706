"""Persisted LED map model (the controller's ledmap.json)."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt

LEDMAP_FILENAME = "ledmap.json"


class LedMap(BaseModel):
    """Logical position -> physical index table.

    ``map[i]`` is the led_index of the pixel shown at logical position ``i``.
    Two maps are equal iff their sequences are equal element-wise, which is
    what pydantic's model equality gives us for a single list field.
    """

    model_config = ConfigDict(frozen=True)

    map: list[StrictInt] = Field(default_factory=list, description="led_index per logical position")

    def __len__(self) -> int:
        return len(self.map)

    def position_of(self, led_index: int) -> int | None:
        """
        Find the logical position that shows a physical pixel.

        Returns:
            The logical position, or None when led_index is not in the map
        """
        try:
            return self.map.index(led_index)
        except ValueError:
            return None

    def is_permutation(self) -> bool:
        """Check that the map holds every index 0..len-1 exactly once."""
        return sorted(self.map) == list(range(len(self.map)))

    def to_json(self) -> str:
        """Serialize to ledmap.json content."""
        return self.model_dump_json()

    @classmethod
    def identity(cls, total: int) -> "LedMap":
        """Create the unmapped order 0..total-1."""
        return cls(map=list(range(total)))
