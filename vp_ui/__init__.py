"""User-facing CLI for vld-perf."""
