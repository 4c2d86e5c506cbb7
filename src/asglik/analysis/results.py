"""
Result objects for likelihood validation and estimation.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional


class _ResultMixin(ABC):
    """JSON export shared by the result classes."""

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Results as a JSON-serializable dictionary."""
        pass

    def to_json(self, filepath: Optional[str] = None, indent: int = 2) -> str:
        """
        Export results as JSON.

        Parameters
        ----------
        filepath : str, optional
            If provided, also write the JSON to this file
        indent : int, default=2
            Indentation level

        Returns
        -------
        str
            JSON string
        """
        json_str = json.dumps(self.to_dict(), indent=indent)
        if filepath is not None:
            Path(filepath).write_text(json_str)
        return json_str


@dataclass
class ValidationResult(_ResultMixin):
    """
    Comparison of the exact likelihood with a Monte-Carlo estimate.

    Attributes
    ----------
    exact : float
        Exact probability of the observed sample
    estimate : float
        Monte-Carlo estimate of the same probability
    std_error : float
        Standard error of the estimate
    trials : int
        Number of Monte-Carlo replicates
    tolerance : float
        Largest absolute difference accepted as agreement
    params : dict
        Mutation rate, ancestor type and history summary
    """

    exact: float
    estimate: float
    std_error: float
    trials: int
    tolerance: float
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def difference(self) -> float:
        """Absolute difference between the exact value and the estimate."""
        return abs(self.exact - self.estimate)

    @property
    def z_score(self) -> float:
        """
        Difference in units of the binomial standard error at the exact value.

        The exact probability is used so that an estimate of 0 or 1 still
        gives a finite score; returns 0.0 when the exact value is 0 or 1.
        """
        variance = self.exact * (1 - self.exact) / self.trials
        if variance <= 0:
            return 0.0
        return (self.estimate - self.exact) / variance ** 0.5

    @property
    def agrees(self) -> bool:
        """True if the estimate lies within ``tolerance`` of the exact value."""
        return self.difference <= self.tolerance

    def summary(self) -> str:
        """
        Generate human-readable summary of the comparison.

        Returns
        -------
        str
            Formatted multi-line summary
        """
        lines = []
        lines.append("=" * 70)
        lines.append("EXACT LIKELIHOOD vs MONTE-CARLO")
        lines.append("=" * 70)
        lines.append("")
        for key, value in self.params.items():
            lines.append(f"  {key:<20} {value}")
        lines.append("")
        lines.append(f"Exact likelihood:     {self.exact:.6f}")
        lines.append(f"Monte-Carlo estimate: {self.estimate:.6f} "
                     f"(SE {self.std_error:.6f}, {self.trials} trials)")
        lines.append(f"Difference:           {self.difference:.6f} "
                     f"(z = {self.z_score:.2f})")
        lines.append("")
        status = "AGREE" if self.agrees else "DISAGREE"
        lines.append(f"Result: {status} at tolerance {self.tolerance}")
        lines.append("=" * 70)
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'exact': float(self.exact),
            'estimate': float(self.estimate),
            'std_error': float(self.std_error),
            'difference': float(self.difference),
            'z_score': float(self.z_score),
            'trials': int(self.trials),
            'tolerance': float(self.tolerance),
            'agrees': bool(self.agrees),
            'params': self.params,
        }


@dataclass
class MutationRateResult(_ResultMixin):
    """
    Maximum likelihood estimate of the mutation rate.

    Attributes
    ----------
    mutation_rate : float
        Estimated mutation rate
    lnL : float
        Log-likelihood at the estimate
    ancestor_type : int or None
        Ancestor type conditioned on, or None if averaged over
    success : bool
        Whether the optimizer converged
    n_evaluations : int
        Number of likelihood evaluations
    """

    mutation_rate: float
    lnL: float
    ancestor_type: Optional[int]
    success: bool
    n_evaluations: int

    def summary(self) -> str:
        lines = []
        lines.append("=" * 70)
        lines.append("MUTATION RATE ESTIMATE")
        lines.append("=" * 70)
        lines.append("")
        lines.append(f"Mutation rate:   {self.mutation_rate:.6f}")
        lines.append(f"Log-likelihood:  {self.lnL:.6f}")
        if self.ancestor_type is None:
            lines.append("Ancestor type:   averaged (stationary weights)")
        else:
            lines.append(f"Ancestor type:   {self.ancestor_type}")
        lines.append(f"Converged:       {self.success} "
                     f"({self.n_evaluations} evaluations)")
        lines.append("=" * 70)
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'mutation_rate': float(self.mutation_rate),
            'lnL': float(self.lnL),
            'ancestor_type': self.ancestor_type,
            'success': bool(self.success),
            'n_evaluations': int(self.n_evaluations),
        }
