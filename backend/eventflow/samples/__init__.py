from eventflow.samples.sample_flows import DEFAULT_EXAMPLE, EXAMPLES, get_example, list_examples

__all__ = ["DEFAULT_EXAMPLE", "EXAMPLES", "get_example", "list_examples"]
