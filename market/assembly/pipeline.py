"""Batch onboarding pipeline.

Seeds the sector registry once, then onboards each blueprint. Every step
commits on its own, so agents finished before a failure stay committed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from market.assembly.assembler import AgentAssembler
from market.domain import Agent, Ledger, Sector, StockRecord
from market.errors import InvalidArgument, MarketError, PreconditionFailed
from market.persistence.interfaces import MarketStore, SectorSource
from market.sectors import SectorRegistry
from market.types import AgentBlueprint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OnboardedAgent:
    agent: Agent
    ledger: Ledger
    stock_records: tuple[StockRecord, ...] = ()


@dataclass(frozen=True)
class AssemblyFailure:
    blueprint: AgentBlueprint
    step: str
    error: Exception
    agent: Optional[Agent] = None  # set when the identity step already committed


@dataclass
class AssemblyReport:
    seeded_sectors: list[Sector] = field(default_factory=list)
    onboarded: list[OnboardedAgent] = field(default_factory=list)
    failures: list[AssemblyFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class AssemblyPipeline:
    """Sector bootstrap followed by per-agent onboarding.

    Fail-fast per agent: the first InvalidArgument or PreconditionFailed
    aborts that agent and is recorded in the report. SourceUnavailable (or
    any other error) aborts the whole run.
    """

    def __init__(
        self,
        *,
        store: MarketStore,
        source: SectorSource,
        registry: Optional[SectorRegistry] = None,
    ) -> None:
        self._store = store
        self._source = source
        self._registry = registry or SectorRegistry(store)
        self._assembler = AgentAssembler(store, self._registry)

    @property
    def assembler(self) -> AgentAssembler:
        return self._assembler

    def run(self, blueprints: Iterable[AgentBlueprint]) -> AssemblyReport:
        report = AssemblyReport()
        report.seeded_sectors = self._registry.seed_from(self._source)

        for blueprint in blueprints:
            try:
                report.onboarded.append(self.onboard(blueprint))
            except OnboardingAborted as failed:
                logger.warning(
                    "Onboarding %s %s aborted at %s: %s",
                    blueprint.name,
                    blueprint.suffix,
                    failed.step,
                    failed.error,
                )
                report.failures.append(
                    AssemblyFailure(blueprint=blueprint, step=failed.step, error=failed.error, agent=failed.agent)
                )

        logger.info(
            "Assembly finished: %d onboarded, %d failed",
            len(report.onboarded),
            len(report.failures),
        )
        return report

    def onboard(self, blueprint: AgentBlueprint) -> OnboardedAgent:
        """Run every onboarding step for one blueprint.

        Raises:
            OnboardingAborted: On the first InvalidArgument or PreconditionFailed
        """
        agent: Optional[Agent] = None
        step = "build_identity"
        try:
            agent = self._assembler.build_identity(blueprint.name, blueprint.suffix, tier=blueprint.tier)

            step = "fund_agent"
            ledger = self._assembler.fund_agent(agent, blueprint.initial_balance)

            step = "stock_agent"
            records = []
            for holding in blueprint.holdings:
                records.append(self._assembler.stock_agent(agent, holding.symbol, holding.quantity))

            if blueprint.bonus_credit is not None:
                step = "credit"
                ledger.credit(blueprint.bonus_credit)
                self._assembler.save_ledger(ledger)
        except (InvalidArgument, PreconditionFailed) as exc:
            raise OnboardingAborted(step=step, error=exc, agent=agent) from exc

        return OnboardedAgent(agent=agent, ledger=ledger, stock_records=tuple(records))


class OnboardingAborted(MarketError):
    """Raised by ``onboard`` when a step fails; wraps the original error."""

    def __init__(self, *, step: str, error: Exception, agent: Optional[Agent]) -> None:
        super().__init__(f"{step}: {error}")
        self.step = step
        self.error = error
        self.agent = agent
