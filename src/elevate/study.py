"""Elevation study orchestrator.

Wires a run deck into the pipeline:

    reference data -> ScenarioSampler -> Ensemble (frozen)
        -> ObjectiveAggregator -> optimize -> grid sweep -> validation

Every stage consumes the same frozen ensemble. Results are exported as a
deterministic JSON document carrying the deck, ensemble and result
fingerprints.

Author: © 2026 Afshin Arjhangmehr
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
import json
import logging

import numpy as np

from .deck.run_deck import RunDeck
from .economics.cost import ElevationCostModel
from .errors import ConfigurationError
from .evaluator.benchmark import EvaluatorComparison, compare_evaluators
from .evaluator.core import EvaluatorSpec, ScenarioEvaluator, make_evaluator
from .extopt.objective import ObjectiveAggregator
from .extopt.validation import ValidationReport, validate_decisions
from .models.inputs import Decision, HouseAsset, ModelParams
from .reference.intake import load_depth_damage, load_slr_trajectories
from .solvers.bounds import Bounds
from .solvers.optimize import OptimizeResult, OptimizerConfig, optimize
from .solvers.sweep import SweepResult, grid_sweep
from .sow.sampler import ScenarioSampler
from .sow.spec import Ensemble, SamplerSpec

logger = logging.getLogger(__name__)

DEFAULT_N_SOWS = 100
DEFAULT_SAMPLER_SEED = 2024


@dataclass
class StudyResult:
    label: str
    deck_fingerprint: str
    ensemble_digest: str
    n_sows: int
    optimization: OptimizeResult
    sweep: Optional[SweepResult] = None
    validation: Optional[ValidationReport] = None

    @property
    def recommended_elevation_ft(self) -> float:
        return float(self.optimization.best_decision[0])

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "schema_version": "elevation_study_result.v1",
            "label": self.label,
            "deck_fingerprint": self.deck_fingerprint,
            "ensemble_digest": self.ensemble_digest,
            "n_sows": self.n_sows,
            "recommended_elevation_ft": self.recommended_elevation_ft,
            "optimization": self.optimization.to_dict(),
        }
        if self.sweep is not None:
            d["sweep"] = {
                "n_points": int(self.sweep.values.size),
                "best_decision": self.sweep.best_decision.tolist(),
                "best_value": self.sweep.best_value,
            }
        if self.validation is not None:
            d["validation"] = self.validation.to_dict()
        return d


class ElevationStudy:
    def __init__(self, deck: RunDeck):
        self.deck = deck
        self.house = self._build_house()
        self.params = self._build_params()
        self.trajectories = self._build_trajectories()
        try:
            self.cost_model = ElevationCostModel(**self._tuple_fields(deck.costs))
        except TypeError as e:
            raise ConfigurationError(f"invalid costs section: {e}") from e
        self.evaluator_spec = EvaluatorSpec.from_dict(deck.evaluator)
        self.sampler_spec = SamplerSpec.from_dict(deck.sampler.get("spec"))
        self.optimizer_config = OptimizerConfig.from_dict(deck.optimizer)
        self.bounds = self._build_bounds()
        self._ensemble: Optional[Ensemble] = None

    @staticmethod
    def from_path(path: str | Path) -> "ElevationStudy":
        return ElevationStudy(RunDeck.from_path(path))

    @staticmethod
    def _tuple_fields(d: Dict[str, Any]) -> Dict[str, Any]:
        return {k: (tuple(v) if isinstance(v, list) else v) for k, v in d.items()}

    def _build_house(self) -> HouseAsset:
        dd = dict(self.deck.depth_damage)
        csv_path = dd.pop("csv", None)
        if not csv_path:
            raise ConfigurationError("depth_damage.csv is required")
        ddf = load_depth_damage(self.deck.resolve_path(csv_path), **dd)
        h = self.deck.house
        try:
            return HouseAsset(
                area_ft2=float(h["area_ft2"]),
                height_above_gauge_ft=float(h["height_above_gauge_ft"]),
                value_usd=float(h["value_usd"]),
                ddf=ddf,
                description=str(h.get("description", ddf.label)),
            )
        except KeyError as e:
            raise ConfigurationError(f"house section missing {e.args[0]!r}") from e

    def _build_params(self) -> ModelParams:
        hz = self.deck.horizon
        if "years" in hz:
            return ModelParams.from_years(self.house, hz["years"])
        try:
            return ModelParams.from_range(self.house, int(hz["start_year"]), int(hz["end_year"]))
        except KeyError as e:
            raise ConfigurationError(f"horizon section missing {e.args[0]!r}") from e

    def _build_trajectories(self) -> List[Any]:
        s = self.deck.slr
        if not s.get("csv"):
            raise ConfigurationError("slr.csv is required")
        vy = s.get("valid_years")
        return load_slr_trajectories(
            self.deck.resolve_path(s["csv"]),
            valid_years=(float(vy[0]), float(vy[1])) if vy else None,
        )

    def _build_bounds(self) -> Bounds:
        b = self.deck.bounds
        lower = b.get("lower", [0.0])
        upper = b.get("upper", [self.cost_model.max_elevation_ft])
        bounds = Bounds.of(lower, upper)
        if bounds.dim != 1:
            raise ConfigurationError("elevation studies have a single decision dimension")
        if bounds.lower[0] < 0.0 or bounds.upper[0] > self.cost_model.max_elevation_ft:
            raise ConfigurationError(
                f"bounds {bounds.to_dict()} exceed the cost table range [0, {self.cost_model.max_elevation_ft:g}] ft"
            )
        return bounds

    def make_evaluator(self, spec: Optional[EvaluatorSpec] = None) -> ScenarioEvaluator:
        return make_evaluator(spec or self.evaluator_spec, cost_model=self.cost_model)

    def sample_ensemble(self, n: int, seed: int, label: str) -> Ensemble:
        sampler = ScenarioSampler.from_seed(self.trajectories, seed, self.sampler_spec)
        return sampler.sample(n, label=label)

    @property
    def ensemble(self) -> Ensemble:
        if self._ensemble is None:
            s = self.deck.sampler
            self._ensemble = self.sample_ensemble(
                int(s.get("n_sows", DEFAULT_N_SOWS)),
                int(s.get("seed", DEFAULT_SAMPLER_SEED)),
                label=f"{self.deck.label}:search",
            )
        return self._ensemble

    def objective(self, evaluator: Optional[ScenarioEvaluator] = None) -> ObjectiveAggregator:
        return ObjectiveAggregator(
            self.ensemble,
            self.params,
            evaluator or self.make_evaluator(),
            sense="min",
            reduction=str(self.deck.objective.get("reduction", "mean")),
        )

    def run_optimization(self) -> OptimizeResult:
        return optimize(self.objective(), self.bounds, self.optimizer_config)

    def run_sweep(self, step: Optional[float] = None) -> SweepResult:
        sw = self.deck.sweep
        if step is None and "n" not in sw:
            step = float(sw.get("step", 0.14))
        return grid_sweep(self.objective(), self.bounds, step=step, n=None if step is not None else int(sw["n"]))

    def run_validation(self, decisions: Sequence[Decision]) -> Optional[ValidationReport]:
        v = self.deck.validation
        if not v or int(v.get("n_sows", 0)) < 1:
            return None
        ens = self.sample_ensemble(int(v["n_sows"]), int(v.get("seed", DEFAULT_SAMPLER_SEED + 1)),
                                   label=f"{self.deck.label}:validation")
        return validate_decisions(decisions, ens, self.params, self.make_evaluator())

    def run_benchmark(self, elevation_ft: float = 0.0, n_samples: Optional[int] = None,
                      seed: int = 0) -> EvaluatorComparison:
        return compare_evaluators(
            Decision(float(elevation_ft)),
            self.ensemble[0],
            self.params,
            spec=self.evaluator_spec,
            n_samples=n_samples,
            seed=seed,
            cost_model=self.cost_model,
        )

    def run(self, *, with_sweep: bool = True) -> StudyResult:
        logger.info("study %s: %d SOWs, horizon %s-%s", self.deck.label, len(self.ensemble),
                    self.params.years[0] if self.params.years else "-",
                    self.params.years[-1] if self.params.years else "-")
        opt = self.run_optimization()
        sweep = self.run_sweep() if with_sweep else None
        candidates = [Decision(opt.best_decision[0])]
        if sweep is not None and not np.isclose(sweep.best_decision[0], opt.best_decision[0]):
            candidates.append(Decision(float(sweep.best_decision[0])))
        candidates.append(Decision(float(self.bounds.lower[0])))
        validation = self.run_validation(candidates)
        return StudyResult(
            label=self.deck.label,
            deck_fingerprint=self.deck.fingerprint_sha256(),
            ensemble_digest=self.ensemble.digest(),
            n_sows=len(self.ensemble),
            optimization=opt,
            sweep=sweep,
            validation=validation,
        )


def write_result_json(result: StudyResult, path: Path) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(result.to_dict(), indent=2, sort_keys=True), encoding="utf-8")
    return p
