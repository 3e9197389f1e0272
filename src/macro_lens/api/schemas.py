"""Request bodies for the HTTP API."""

from macro_lens.domain.analysis import MealAnalysis


class SaveMealRequest(MealAnalysis):
    """Analyzed meal submitted for saving, with an optional image reference."""

    image_url: str | None = None

    def to_analysis(self) -> MealAnalysis:
        """Return the analysis without the image reference."""
        return MealAnalysis.model_validate(self.model_dump(exclude={"image_url"}))
