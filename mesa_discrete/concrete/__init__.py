"""
Concrete implementations of mesa-discrete components.

This package provides concrete implementations of the abstract base
classes defined in mesa_discrete.abstract.

Subpackages:
    space: GridSpace and GraphSpace, discrete spaces backed by an OccupancyIndex.

Modules:
    agent: Defines the Agent class, the base class for user agents.
    model: Provides the Model class, the base class for models in mesa-discrete.
"""
