"""
mesa-discrete abstract components.

This package contains the abstract base classes that define the interfaces
between agents, models and discrete spaces.

Classes:
    agent.py:
        - AbstractAgent: Abstract base class for agents placed in a discrete space.

    space/space.py:
        - Space: Abstract base class for all space classes.

    space/discrete.py:
        - AbstractDiscreteSpace: Abstract base class for discrete spaces (Grids and
          Graphs). It implements position enumeration, random selection and
          placement once, against two abstract operations.

Usage:
    These classes are not meant to be instantiated directly. Instead, they
    should be inherited by concrete implementations:

    from mesa_discrete.abstract.space import AbstractDiscreteSpace

    class RingSpace(AbstractDiscreteSpace):
        def _iter_positions(self):
            ...

        def ids_in_position(self, pos):
            ...
"""
