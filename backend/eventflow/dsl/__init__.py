from eventflow.dsl.parser import default_event, parse_dsl
from eventflow.dsl.paths import parse_path

__all__ = ["default_event", "parse_dsl", "parse_path"]
