from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from elevate.cli import main
from elevate.deck.run_deck import RunDeck
from elevate.errors import ConfigurationError, ReferenceDataError
from elevate.study import ElevationStudy, write_result_json


def _deck_dict(demo_dir: Path) -> dict:
    return {
        "schema_version": "run_deck.v1",
        "label": "pytest_small",
        "house": {"area_ft2": 500, "height_above_gauge_ft": 4, "value_usd": 250000},
        "depth_damage": {
            "csv": str(demo_dir / "depth_damage.csv"),
            "description": "one story, no basement, Structure",
            "occupancy": "RES1",
            "source": "USACE - Galveston",
        },
        "slr": {"csv": str(demo_dir / "slr_oddo.csv"), "valid_years": [1900, 2300]},
        "horizon": {"start_year": 2024, "end_year": 2043},
        "sampler": {"n_sows": 6, "seed": 11},
        "optimizer": {"time_limit_s": 20.0, "seed": 3, "pop_size": 8, "max_generations": 10},
        "sweep": {"n": 15},
        "validation": {"n_sows": 12, "seed": 12},
    }


@pytest.fixture
def deck_path(tmp_path, demo_dir) -> Path:
    p = tmp_path / "deck.yaml"
    p.write_text(yaml.safe_dump(_deck_dict(demo_dir)), encoding="utf-8")
    return p


def test_deck_round_trip_and_fingerprint(deck_path, tmp_path, demo_dir) -> None:
    deck = RunDeck.from_path(deck_path)
    assert deck.label == "pytest_small"
    assert deck.base_dir == tmp_path.resolve()
    jpath = tmp_path / "deck.json"
    jpath.write_text(json.dumps(_deck_dict(demo_dir)), encoding="utf-8")
    assert RunDeck.from_path(jpath).fingerprint_sha256() == deck.fingerprint_sha256()


def test_deck_validation_errors(demo_dir) -> None:
    d = _deck_dict(demo_dir)
    with pytest.raises(ConfigurationError, match="unknown top-level"):
        RunDeck.from_dict({**d, "plots": {}})
    bad = dict(d)
    bad.pop("horizon")
    with pytest.raises(ConfigurationError, match="missing required"):
        RunDeck.from_dict(bad)
    with pytest.raises(ConfigurationError, match="schema_version"):
        RunDeck.from_dict({**d, "schema_version": "run_deck.v0"})


def test_study_rejects_bad_configuration(demo_dir) -> None:
    d = _deck_dict(demo_dir)
    with pytest.raises(ConfigurationError):
        ElevationStudy(RunDeck.from_dict({**d, "house": {**d["house"], "area_ft2": 0}}))
    with pytest.raises(ConfigurationError):
        ElevationStudy(RunDeck.from_dict({**d, "bounds": {"lower": [0.0], "upper": [20.0]}}))
    with pytest.raises(ConfigurationError):
        ElevationStudy(RunDeck.from_dict({**d, "costs": {"slope": 3}}))
    with pytest.raises(ReferenceDataError):
        ElevationStudy(RunDeck.from_dict({**d, "depth_damage": {**d["depth_damage"], "description": "houseboat"}}))


def test_study_run_end_to_end(deck_path, tmp_path) -> None:
    study = ElevationStudy.from_path(deck_path)
    assert len(study.params.years) == 20
    result = study.run()
    assert 0.0 <= result.recommended_elevation_ft <= 14.0
    assert result.n_sows == 6
    assert result.ensemble_digest == ElevationStudy.from_path(deck_path).ensemble.digest()
    assert result.validation is not None and result.validation.n_sows == 12
    out = write_result_json(result, tmp_path / "res" / "result.json")
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["schema_version"] == "elevation_study_result.v1"
    assert payload["sweep"]["n_points"] == 15
    assert payload["optimization"]["digest"] == result.optimization.digest()


def test_benchmark_path(deck_path) -> None:
    cmp = ElevationStudy.from_path(deck_path).run_benchmark(elevation_ft=0.0, n_samples=2000, seed=1)
    assert cmp.n_samples == 2000
    assert cmp.quadrature_npv_damage_usd > 0.0


def test_cli_commands(deck_path, tmp_path, capsys) -> None:
    out_csv = tmp_path / "sweep.csv"
    assert main(["sweep", "--deck", str(deck_path), "--out", str(out_csv), "--step", "1.4"]) == 0
    assert len(out_csv.read_text(encoding="utf-8").strip().splitlines()) == 1 + 11

    out_json = tmp_path / "result.json"
    assert main(["--log-level", "WARNING", "optimize", "--deck", str(deck_path), "--out", str(out_json),
                 "--no-sweep"]) == 0
    assert "recommended_elevation_ft" in json.loads(out_json.read_text(encoding="utf-8"))

    capsys.readouterr()
    assert main(["benchmark", "--deck", str(deck_path), "--samples", "500"]) == 0
    assert "rel_error_npv_damage" in json.loads(capsys.readouterr().out)


def test_cli_reports_configuration_errors(tmp_path, demo_dir) -> None:
    p = tmp_path / "broken.json"
    p.write_text(json.dumps({**_deck_dict(demo_dir), "surprise": 1}), encoding="utf-8")
    assert main(["optimize", "--deck", str(p)]) == 2
