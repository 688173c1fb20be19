from typing import Any, List, Optional, Tuple

import pytest

from ganymede_toolkit.core.services import ProgressService


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakeIntentHandler:
    """Records every collaborator call; checkbox toggles reach a real ProgressService."""

    def __init__(self, progress: Optional[ProgressService] = None) -> None:
        self.calls: List[Tuple[Any, ...]] = []
        self.progress = progress or ProgressService()
        self.download_result: Any = True
        self.fail_on: Optional[str] = None

    def _record(self, name: str, *args: Any) -> None:
        if self.fail_on == name:
            raise RuntimeError(f"{name} unavailable")
        self.calls.append((name, *args))

    def copy_to_clipboard(self, text):
        self._record("copy_to_clipboard", text)

    def open_external_url(self, url):
        self._record("open_external_url", url)

    def open_image_viewer(self, url, title):
        self._record("open_image_viewer", url, title)

    def navigate_to_guide_step(self, guide_id, step):
        self._record("navigate_to_guide_step", guide_id, step)

    def request_guide_download(self, guide_id):
        if isinstance(self.download_result, Exception):
            raise self.download_result
        self._record("request_guide_download", guide_id)
        return self.download_result

    def toggle_checkbox(self, guide_id, step_index, checkbox_index):
        self._record("toggle_checkbox", guide_id, step_index, checkbox_index)
        return self.progress.toggle_checkbox(guide_id, step_index, checkbox_index)


@pytest.fixture
def progress():
    return ProgressService()


@pytest.fixture
def handler(progress):
    return FakeIntentHandler(progress)
