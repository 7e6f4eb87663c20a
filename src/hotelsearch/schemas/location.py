from pydantic import BaseModel, computed_field


class LocationSuggestion(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    name: str
    city: str
    country: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def label(self) -> str:
        return f"{self.city}, {self.country}"


class LocationAutocompleteResponse(BaseModel):
    locations: list[LocationSuggestion]
