"""Multi-user todo board: JWT-authenticated Flask API over SQLAlchemy."""
