from __future__ import annotations

import logging
from typing import BinaryIO

from .errors import EmptyCodeError, InputError, OutputError
from .lexer import Program, Token, tokenize
from .state import Tape

logger = logging.getLogger(__name__)

SNAPSHOT_CELLS = 16


class Interpreter:
    """
    Brainfuck interpreter.

    Execution Model:
    - Source is tokenized once; the loop jump table is built before running
    - Runs of identical '>' '<' '+' '-' are applied as one step
    - The tape grows on demand and is discarded when execute() returns

    I/O:
    - reader: binary stream, read(1) returning b'' at end of input
    - writer: binary stream, one write() per '.'
    """

    def execute(self, code: str, reader: BinaryIO, writer: BinaryIO) -> None:
        if len(code) == 0:
            raise EmptyCodeError(message="EmptyCode: no code to execute")

        program = tokenize(code)
        logger.debug("tokenized %d operations (%d loops)", len(program), len(program.jump_table.starts))

        tape = Tape()
        steps = self._run(program, tape, reader, writer)
        logger.debug("finished after %d steps, tape length %d", steps, len(tape))
        logger.debug("tape head: %s", tape.snapshot(SNAPSHOT_CELLS))

    def _run(self, program: Program, tape: Tape, reader: BinaryIO, writer: BinaryIO) -> int:
        tokens = program.tokens
        jumps = program.jump_table
        steps = 0
        i = 0
        while i < len(tokens):
            token = tokens[i]
            steps += 1

            if token is Token.INC_PTR:
                count = program.run_length(i)
                tape.move_right(count)
                i += count - 1
            elif token is Token.DEC_PTR:
                count = program.run_length(i)
                tape.move_left(count)
                i += count - 1
            elif token is Token.INC_VAL:
                count = program.run_length(i)
                tape.add(count)
                i += count - 1
            elif token is Token.DEC_VAL:
                count = program.run_length(i)
                tape.sub(count)
                i += count - 1
            elif token is Token.LOOP_START:
                if tape.get() == 0:
                    i = jumps.end_of(i)
            elif token is Token.LOOP_END:
                if tape.get() != 0:
                    i = jumps.start_of(i)
            elif token is Token.INPUT:
                tape.set(self._read_byte(reader))
            elif token is Token.OUTPUT:
                self._write_byte(writer, tape.get())

            i += 1
        return steps

    @staticmethod
    def _read_byte(reader: BinaryIO) -> int:
        try:
            data = reader.read(1)
        except (OSError, ValueError) as exc:
            raise InputError(message=f"Input: cannot read from input stream ({exc})") from exc
        if not data:
            # end of input reads as zero
            return 0
        return data[0]

    @staticmethod
    def _write_byte(writer: BinaryIO, value: int) -> None:
        try:
            writer.write(bytes((value,)))
        except (OSError, ValueError) as exc:
            raise OutputError(message=f"Output: cannot write to output stream ({exc})") from exc


def execute(code: str, reader: BinaryIO, writer: BinaryIO) -> None:
    Interpreter().execute(code, reader, writer)
