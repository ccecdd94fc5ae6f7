"""cquver -- NestJS DDD/CQRS boilerplate generator."""

__version__ = "0.1.0"
