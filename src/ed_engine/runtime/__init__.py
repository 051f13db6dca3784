"""Runtime services shared by every engine layer."""
