"""Typed scenario parameters for protocol sessions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from omegaconf import DictConfig

from mimac.energy.hardware import CurrentProfile
from mimac.energy.models import DEFAULT_STATE_SCALE, DEFAULT_TRANSMIT_SCALE, EnergyModel
from mimac.protocol.coils import CoilReading
from mimac.protocol.packets import Coil, PacketCatalog
from mimac.utils.config import DEFAULTS, default_config, to_dict, validate_config


def _default_readings() -> tuple[CoilReading, ...]:
    return tuple(
        CoilReading(Coil.from_name(entry["coil"]), float(entry["rssi_dbm"]))
        for entry in DEFAULTS["coils"]
    )


def _default_holds() -> dict[str, dict[str, float]]:
    return {variant: dict(phases) for variant, phases in DEFAULTS["holds"].items()}


def _to_float(value: Any, where: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{where} must be a number, got {value!r}") from None


@dataclass
class ScenarioConfig:
    """Injected parameters of a comparison run.

    Attributes:
        profile: Per-state current draw.
        state_scale: Conversion factor for state-hold charges.
        transmit_scale: Conversion factor for packet charges.
        data_bytes: Representative DATA packet size.
        coil_readings: Ordered per-coil RSSI readings.
        holds: Hold durations keyed by variant, then phase.
    """

    profile: CurrentProfile = field(default_factory=CurrentProfile)
    state_scale: float = DEFAULT_STATE_SCALE
    transmit_scale: float = DEFAULT_TRANSMIT_SCALE
    data_bytes: int = 10
    coil_readings: tuple[CoilReading, ...] = field(default_factory=_default_readings)
    holds: dict[str, dict[str, float]] = field(default_factory=_default_holds)

    def energy_model(self) -> EnergyModel:
        """Build the energy model for this scenario."""
        return EnergyModel(
            self.profile,
            PacketCatalog(self.data_bytes),
            state_scale=self.state_scale,
            transmit_scale=self.transmit_scale,
        )

    def hold_units(self, variant: str, phase: str) -> float:
        """Hold duration of a phase.

        Raises:
            ValueError: If the variant or phase has no configured duration.
        """
        try:
            return self.holds[variant][phase]
        except KeyError:
            raise ValueError(f"No hold duration configured for {variant}.{phase}") from None

    @classmethod
    def from_config(cls, config: DictConfig | None = None) -> ScenarioConfig:
        """Create a scenario from an OmegaConf configuration.

        Args:
            config: Scenario configuration; defaults if None.

        Raises:
            ValueError: If required keys are missing or values are invalid.
        """
        if config is None:
            config = default_config()
        validate_config(config)
        raw: dict[str, Any] = to_dict(config)

        energy = raw["energy"]
        readings = []
        for i, entry in enumerate(raw["coils"]):
            if not isinstance(entry, dict) or not {"coil", "rssi_dbm"} <= entry.keys():
                raise ValueError(f"coils[{i}] needs 'coil' and 'rssi_dbm'")
            readings.append(
                CoilReading(
                    Coil.from_name(str(entry["coil"])),
                    _to_float(entry["rssi_dbm"], f"coils[{i}].rssi_dbm"),
                )
            )
        holds = {
            variant: {
                phase: _to_float(units, f"holds.{variant}.{phase}")
                for phase, units in phases.items()
            }
            for variant, phases in raw["holds"].items()
        }
        return cls(
            profile=CurrentProfile.from_dict(energy["currents_ua"]),
            state_scale=_to_float(energy["state_scale"], "energy.state_scale"),
            transmit_scale=_to_float(energy["transmit_scale"], "energy.transmit_scale"),
            data_bytes=int(raw["packets"]["data_bytes"]),
            coil_readings=tuple(readings),
            holds=holds,
        )
