"""Extract node: select the surfaced content and reduce it to text."""

from __future__ import annotations

from task_relay.extraction.normalizer import normalize_content, renormalize
from task_relay.extraction.selector import select_content
from task_relay.graph.state import RelayState


def run(state: RelayState) -> RelayState:
    selection = select_content(state["task_run"])
    content = normalize_content(selection.value)
    # Some runs JSON-encode the text-object payload a second time.
    content = renormalize(content)
    return {"selection": selection, "content": content}
