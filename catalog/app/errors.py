class RenderFailure(Exception):
    """Markdown conversion or sanitization failed for a piece of text."""

    def __init__(self, stage: str, reason: str):
        super().__init__(f"{stage} failed: {reason}")
        self.stage = stage
        self.reason = reason
