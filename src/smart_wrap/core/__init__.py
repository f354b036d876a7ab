"""Pure classification and decoration of pane lines."""
