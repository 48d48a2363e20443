from typing import Any


class FlowDetectionError(ValueError):
    """Raised when no flow service recognises the form data."""

    def __init__(self, url_path: str, ad_type: str | None, flow_meta: dict[str, Any] | None = None):
        self.url_path = url_path
        self.ad_type = ad_type
        self.flow_meta = flow_meta or {}
        super().__init__(
            f"Could not detect listing flow (url_path={url_path!r}, ad_type={ad_type!r}, flow={self.flow_meta!r})"
        )


class UnknownFlowTypeError(ValueError):
    """Raised on a lookup by a flow type that is not registered."""

    def __init__(self, flow_type: str, known_types: list[str]):
        self.flow_type = flow_type
        self.known_types = known_types
        super().__init__(f"Unknown flow type: {flow_type!r}. Valid types: {', '.join(known_types)}")
