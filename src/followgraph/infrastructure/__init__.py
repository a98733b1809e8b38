"""Storage collaborator: SQLite engine, repositories, and the GraphStore handle."""
