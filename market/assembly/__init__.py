"""Agent assembly: step-wise builder, batch pipeline and random generator."""

from .assembler import AgentAssembler
from .generator import MarketGenerator
from .pipeline import AssemblyFailure, AssemblyPipeline, AssemblyReport, OnboardedAgent, OnboardingAborted

__all__ = [
    "AgentAssembler",
    "AssemblyFailure",
    "AssemblyPipeline",
    "AssemblyReport",
    "MarketGenerator",
    "OnboardedAgent",
    "OnboardingAborted",
]
