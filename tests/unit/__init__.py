"""Unit tests: domain, application and presenter layers in isolation."""
