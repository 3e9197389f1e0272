"""Error kinds surfaced by the meal analysis pipeline."""

EXCERPT_LIMIT = 200


class AnalysisError(Exception):
    """Base class for failures that end a single analysis request."""

    user_message = "Something went wrong. Please try again."


class ImageRejected(AnalysisError):
    """The uploaded image could not be decoded or transcoded."""

    user_message = "Failed to process image. Please try a different photo."


class MalformedResponse(AnalysisError):
    """The model reply could not be decoded as a JSON object."""

    user_message = "AI returned invalid format. Try uploading a clearer food image."

    def __init__(self, text: str) -> None:
        self.excerpt = text[:EXCERPT_LIMIT]
        super().__init__(f"Model reply is not valid JSON: {self.excerpt!r}")


class NoFoodDetected(AnalysisError):
    """The decoded reply carried no usable food list."""

    user_message = (
        "Could not detect any food in the image. "
        "Please try again with a clearer photo."
    )


class UpstreamFailure(AnalysisError):
    """A call to the vision model or the database failed."""

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        self.detail = detail
        message = f"{operation} failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
