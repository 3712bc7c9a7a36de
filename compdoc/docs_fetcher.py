"""Fetches pre-existing prose documentation for components over HTTP."""

from __future__ import annotations

from http.client import HTTPException
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .logging import get_logger

DEFAULT_DOCS_BASE_URL = (
    "https://raw.githubusercontent.com/wavemaker/docs/master/learn/app-development/widgets"
)

DOCS_SEPARATOR = "\n\n---\n\n"

# The docs repository layout does not follow component names, so paths are mapped by hand.
DOC_PATH_MAPPING: Dict[str, Tuple[str, ...]] = {
    # Containers
    "accordion": ("container/accordion.md",),
    "container": ("container/container.md",),
    "layoutgrid": ("container/grid-layout.md",),
    "linearlayout": ("container/layout.md",),
    "panel": ("container/panel.md",),
    "tabs": ("container/tabs.md",),
    "tile": ("container/tile.md",),
    "wizard": ("container/wizard.md",),
    # Basic
    "anchor": ("basic/anchor.md",),
    "icon": ("basic/icon.md",),
    "label": ("basic/label.md",),
    "lottie": ("basic/lottie.md",),
    "message": ("basic/message.md",),
    "picture": ("basic/picture.md",),
    "progress-bar": ("basic/progress-bar.md",),
    "progress-circle": ("basic/progress-circle.md",),
    "search": ("basic/search.md",),
    "spinner": ("basic/spinner.md",),
    "video": ("basic/video.md",),
    "tooltip": ("navigation/popover.md",),
    # Form inputs
    "button": ("form-widgets/button.md",),
    "buttongroup": ("form-widgets/button-group.md",),
    "calendar": ("form-widgets/calendar.md",),
    "checkbox": ("form-widgets/checkbox.md",),
    "checkboxset": ("form-widgets/checkboxset.md",),
    "chips": ("form-widgets/chips.md",),
    "currency": ("form-widgets/currency.md",),
    "date": ("form-widgets/date-time-datetime.md",),
    "datetime": ("form-widgets/date-time-datetime.md",),
    "time": ("form-widgets/date-time-datetime.md",),
    "fileupload": ("form-widgets/file-upload.md",),
    "number": ("form-widgets/number.md",),
    "radioset": ("form-widgets/radioset.md",),
    "rating": ("form-widgets/rating-widget.md",),
    "select": ("form-widgets/select.md",),
    "selectlocale": ("form-widgets/select-locale.md",),
    "slider": ("form-widgets/slider.md",),
    "switch": ("form-widgets/switch.md",),
    "text": ("form-widgets/text.md",),
    "textarea": ("form-widgets/textarea.md",),
    "toggle": ("form-widgets/toggle.md",),
    # Charts
    "area-chart": ("chart/chart-widget.md",),
    "bar-chart": ("chart/chart-widget.md",),
    "bubble-chart": ("chart/chart-widget.md",),
    "column-chart": ("chart/chart-widget.md",),
    "donut-chart": ("chart/chart-widget.md",),
    "line-chart": ("chart/chart-widget.md",),
    "pie-chart": ("chart/chart-widget.md",),
    # Data
    "card": ("datalive/cards.md", "datalive/cards/cards-properties-events-methods.md"),
    "list": ("datalive/list.md", "datalive/list/list-properties-events-methods.md"),
    "form": ("datalive/form.md", "datalive/form/form-events-methods.md"),
    "liveform": ("datalive/live-form.md", "datalive/live-form/events-methods.md"),
    # Navigation
    "menu": ("navigation/dropdown-menu.md",),
    "navbar": ("navigation/nav-bar.md",),
    "popover": ("navigation/popover.md",),
    # Dialogs
    "dialog": ("design-dialog.md",),
    "alertdialog": ("alert-dialog.md",),
    "confirmdialog": ("confirm-dialog.md",),
    # Advanced
    "carousel": ("advanced/carousel.md",),
    "login": ("advanced/login.md",),
    "webview": ("mobile-widgets/media-list.md",),
    # Device
    "barcodescanner": ("mobile-widgets/barcode-scanner.md",),
    "bottomsheet": ("mobile-widgets/bottom-sheet.md",),
    "camera": ("mobile-widgets/camera.md",),
}

Opener = Callable[[str, float], str]


class DocsFetcher:
    """Looks up and downloads the narrative markdown for a component."""

    def __init__(
        self,
        base_url: str = DEFAULT_DOCS_BASE_URL,
        path_mapping: Mapping[str, Sequence[str]] | None = None,
        *,
        request_timeout: float = 30.0,
        opener: Opener | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.path_mapping = path_mapping if path_mapping is not None else DOC_PATH_MAPPING
        self.request_timeout = request_timeout
        self._opener = opener or self._http_get
        self.logger = get_logger("docs")

    def paths_for(self, component_name: str) -> List[str]:
        return list(self.path_mapping.get(component_name.lower(), ()))

    def fetch(self, component_name: str) -> Optional[str]:
        """Return the concatenated markdown for a component, or None when nothing is available."""
        paths = self.paths_for(component_name)
        if not paths:
            self.logger.info("No documentation mapping found for %s", component_name)
            return None

        contents: List[str] = []
        for doc_path in paths:
            url = f"{self.base_url}/{doc_path}"
            self.logger.debug("Fetching docs from %s", doc_path)
            try:
                content = self._opener(url, self.request_timeout)
            except RuntimeError as exc:
                self.logger.warning("Failed to fetch docs from %s: %s", doc_path, exc)
                continue
            self.logger.debug("Fetched %d bytes from %s", len(content), doc_path)
            contents.append(content)

        if not contents:
            return None

        result = DOCS_SEPARATOR.join(contents)
        self.logger.info("Fetched %d bytes of documentation for %s", len(result), component_name)
        return result

    def fetch_many(self, component_names: Sequence[str]) -> Dict[str, str]:
        prose: Dict[str, str] = {}
        for name in component_names:
            content = self.fetch(name)
            if content is not None:
                prose[name] = content
        return prose

    @staticmethod
    def _http_get(url: str, timeout: float) -> str:
        request = Request(url, headers={"Accept": "text/plain"}, method="GET")
        try:
            with urlopen(request, timeout=timeout) as response:  # type: ignore[arg-type]
                raw = response.read()
        except HTTPError as exc:  # pragma: no cover - depends on network
            raise RuntimeError(f"status {exc.code}") from exc
        except URLError as exc:  # pragma: no cover - depends on network
            raise RuntimeError(str(exc.reason)) from exc
        except (HTTPException, OSError) as exc:
            raise RuntimeError(str(exc) or type(exc).__name__) from exc
        return raw.decode("utf-8", errors="replace")


__all__ = ["DEFAULT_DOCS_BASE_URL", "DOCS_SEPARATOR", "DOC_PATH_MAPPING", "DocsFetcher"]
