"""LangGraph workflow assembly for the relay pipeline."""

from langgraph.graph import END, StateGraph

from task_relay.config.relay import RelayConfig
from task_relay.graph.nodes import classify, dispatch, extract, poll
from task_relay.graph.state import RelayState
from task_relay.runs.poller import TaskPoller
from task_relay.runs.trigger import TaskTrigger


def build_graph(*, config: RelayConfig, trigger: TaskTrigger, poller: TaskPoller):
    graph = StateGraph(RelayState)

    graph.add_node("dispatch", dispatch.build(trigger=trigger, endpoint=config.signed_url))
    graph.add_node("poll", poll.build(poller=poller, config=config))
    graph.add_node("extract", extract.run)
    graph.add_node("classify", classify.run)

    graph.set_entry_point("dispatch")
    graph.add_edge("dispatch", "poll")
    graph.add_edge("poll", "extract")
    graph.add_edge("extract", "classify")
    graph.add_edge("classify", END)

    return graph.compile()
