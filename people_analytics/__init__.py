"""People analytics pipeline: attrition, performance and satisfaction analyses over HR exports."""

__version__ = "0.1.0"
