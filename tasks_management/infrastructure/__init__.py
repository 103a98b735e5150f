"""Infrastructure: SQLAlchemy persistence implementing the application ports."""
