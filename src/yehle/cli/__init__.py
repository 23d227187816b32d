"""Terminal interface building blocks for yehle."""
