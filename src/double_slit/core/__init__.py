"""Physics kernel: intensity model, sampler, particle engine, accumulation."""
