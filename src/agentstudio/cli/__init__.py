"""Agent Studio command-line interface."""
