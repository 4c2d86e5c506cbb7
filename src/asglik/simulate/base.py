"""
Base class for event-history simulators.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Union

import numpy as np

from ..core.events import EventHistory

Seed = Optional[Union[int, np.random.Generator]]


class Simulator(ABC):
    """
    Abstract base class for stochastic simulators of event histories.

    Subclasses implement a specific process (the ancestral selection graph,
    the mutation overlay) and share the seeded random number generator.

    Parameters
    ----------
    seed : int or numpy.random.Generator, optional
        Random seed for reproducibility, or an existing generator to draw
        from

    Attributes
    ----------
    rng : numpy.random.Generator
        Random number generator; successive calls to :meth:`simulate` keep
        drawing from it, so they produce independent replicates
    """

    def __init__(self, seed: Seed = None):
        # default_rng returns an existing Generator unchanged
        self.rng = np.random.default_rng(seed)

    @abstractmethod
    def simulate(self) -> EventHistory:
        """
        Simulate one event history.

        Returns
        -------
        EventHistory
            Events ordered from the ultimate ancestor to the present
        """
        pass

    @abstractmethod
    def get_parameters(self) -> Dict:
        """
        Get simulation parameters for output metadata.

        Returns
        -------
        dict
            Dictionary of model parameters
        """
        pass
