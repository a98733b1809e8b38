"""Rich/JSON rendering of service results."""
