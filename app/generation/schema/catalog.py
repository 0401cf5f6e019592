from pydantic import BaseModel, ConfigDict, Field


class ExerciseRecord(BaseModel):
    """Read-only exercise catalog entry.

    The catalog is owned by an external provider; the engine never mutates it.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    exercise_type: str = Field("Strength", description="Strength | Aerobic | Stretching | Plyometrics ...")
    body_part: str = Field("", description="Primary body part, e.g. Chest, Thighs, Upper Arms, Waist")
    equipment: str = Field("", description="Declared equipment string, e.g. 'Barbell' or 'Dumbbell / Bench'")
    target: str = Field("", description="Target muscle(s), comma separated")
    synergist: str = Field("", description="Synergist muscles, comma separated")
    gender: str = ""
    complexity_rating: int | None = Field(None, ge=1, le=5)
