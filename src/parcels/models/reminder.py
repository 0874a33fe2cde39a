from datetime import date

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Reminder(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str | None = Field(None, alias="titulo")
    description: str | None = Field(None, alias="descripcion")
    due_date: date | None = Field(None, alias="fecha_limite")


class ReminderIn(BaseModel):
    title: str | None = Field(None, validation_alias=AliasChoices("titulo", "title"))
    description: str | None = Field(
        None, validation_alias=AliasChoices("descripcion", "description")
    )
    due_date: date | None = Field(None, validation_alias=AliasChoices("fecha_limite", "date"))

    def to_row(self) -> dict:
        return {
            "titulo": self.title,
            "descripcion": self.description,
            "fecha_limite": self.due_date.isoformat() if self.due_date else None,
        }
