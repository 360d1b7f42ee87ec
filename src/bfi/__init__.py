
__version__ = "0.1.0"

from .lexer import JumpTable, Program, Token, consecutive_run_length, tokenize
from .interpreter import Interpreter, execute
from .api import RunOptions, RunResult, run_file, run_string
from .errors import (
    BFIError,
    EmptyCodeError,
    InputError,
    NegativePointerError,
    NoValidTokensError,
    OutputError,
    UnmatchedLoopEndError,
    UnmatchedLoopStartError,
)

__all__ = [
    'Token',
    'JumpTable',
    'Program',
    'tokenize',
    'consecutive_run_length',
    'Interpreter',
    'execute',
    'RunOptions',
    'RunResult',
    'run_string',
    'run_file',
    'BFIError',
    'EmptyCodeError',
    'NoValidTokensError',
    'UnmatchedLoopStartError',
    'UnmatchedLoopEndError',
    'NegativePointerError',
    'InputError',
    'OutputError',
]
