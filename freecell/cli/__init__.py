"""Terminal front end for the FreeCell engine."""
