from langgraph.graph import END, START, StateGraph

from app.pipeline.nodes.analysis import combine_transcripts, extract_fields, finalize
from app.pipeline.nodes.recordings import load_recordings, transcribe_recordings
from app.pipeline.state import TicketState

# Define the graph structure
graph = StateGraph(TicketState)
graph.add_node("load_recordings", load_recordings)
graph.add_node("transcribe_recordings", transcribe_recordings)
graph.add_node("combine_transcripts", combine_transcripts)
graph.add_node("extract_fields", extract_fields)
graph.add_node("finalize", finalize)

# Every step is checked for prior completion by the step itself, so the whole
# chain can simply be re-run on retry.
graph.add_edge(START, "load_recordings")
graph.add_edge("load_recordings", "transcribe_recordings")
graph.add_edge("transcribe_recordings", "combine_transcripts")
graph.add_edge("combine_transcripts", "extract_fields")
graph.add_edge("extract_fields", "finalize")
graph.add_edge("finalize", END)

runnable = graph.compile()
