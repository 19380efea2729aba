"""Campus Commons: course resources, reviews and moderation backend."""

__version__ = "0.1.0"
