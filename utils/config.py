from __future__ import annotations
import dataclasses

@dataclasses.dataclass
class ReActSettings:
    max_iters: int = 10

@dataclasses.dataclass
class TreeOfThoughtsSettings:
    max_depth: int = 3
    beam_width: int = 3

@dataclasses.dataclass
class ProgramSettings:
    timeout_ms: int = 1000

@dataclasses.dataclass
class ConsensusSettings:
    rounds: int = 1

@dataclasses.dataclass
class ReasoningSettings:
    react: ReActSettings = dataclasses.field(default_factory=ReActSettings)
    tot: TreeOfThoughtsSettings = dataclasses.field(default_factory=TreeOfThoughtsSettings)
    program: ProgramSettings = dataclasses.field(default_factory=ProgramSettings)
    consensus: ConsensusSettings = dataclasses.field(default_factory=ConsensusSettings)
    default_mode: str = "react"

@dataclasses.dataclass
class LoggingConsole:
    enabled: bool = True
    renderer: str = "pretty"

@dataclasses.dataclass
class LoggingRotation:
    enabled: bool = True
    max_bytes: int = 10_000_000
    backup_count: int = 5

@dataclasses.dataclass
class LoggingFile:
    enabled: bool = False
    level: str = "DEBUG"
    path: str = "logs/app.log"
    rotation: LoggingRotation = dataclasses.field(default_factory=LoggingRotation)

@dataclasses.dataclass
class Logging:
    level: str = "INFO"
    console: LoggingConsole = dataclasses.field(default_factory=LoggingConsole)
    file: LoggingFile = dataclasses.field(default_factory=LoggingFile)

@dataclasses.dataclass
class Config:
    reasoning: ReasoningSettings = dataclasses.field(default_factory=ReasoningSettings)
    logging: Logging = dataclasses.field(default_factory=Logging)
