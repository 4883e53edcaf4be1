# -*- coding: utf-8 -*-
"""Collapse runs of adjacent repeated lines.

A run is a maximal sequence of consecutive lines that are equal once leading
and trailing whitespace is stripped. Each run is written once, using the
text of its first line, optionally preceded by the length of the run.
"""
import io
import itertools
import logging
import os
import sys
from collections import namedtuple

STDIN_NAME = '-'

CollapseResult = namedtuple('CollapseResult', ['lines', 'records'])


class UniqError(Exception):
    """Base class of the errors reported by the uniq command."""

    def __init__(self, name, cause):
        self.name = name
        self.cause = cause
        Exception.__init__(self, '{}: {}'.format(name, cause))


class SourceOpenError(UniqError):
    """The input file could not be opened."""


class SinkCreateError(UniqError):
    """The output file could not be created."""


class UniqIOError(UniqError):
    """Reading a line or writing a record failed."""


# Unicode White_Space. str.strip() with no argument also removes the
# separators U+001C..U+001F, which are not whitespace here.
WHITESPACE = (
    '\t\n\x0b\x0c\r \x85\xa0\u1680'
    '\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a'
    '\u2028\u2029\u202f\u205f\u3000'
)


def _describe(e):
    if isinstance(e, OSError) and e.strerror:
        return e.strerror
    return str(e)


def _close_quietly(close):
    # only used while another error is on its way to the caller
    try:
        close()
    except (OSError, ValueError):
        pass


class Run(namedtuple('Run', ['text', 'count', 'key'])):
    """
    The pending run: the verbatim text of its first line, how many lines
    it holds so far and the stripped text used for comparisons.
    """
    __slots__ = ()

    @classmethod
    def start(cls, line):
        return cls(line, 1, line.strip(WHITESPACE))

    def matches(self, line):
        return self.key == line.strip(WHITESPACE)

    def extend(self):
        return self._replace(count=self.count + 1)


def iter_runs(lines):
    """
    Group an iterable of lines into runs of adjacent trim-equal lines.
    :param lines: lines, terminators included
    :type lines: iterable of str
    :return: the closed runs, in input order
    :rtype: generator of Run
    """
    run = None
    for line in lines:
        if run is None:
            run = Run.start(line)
        elif run.matches(line):
            run = run.extend()
        else:
            yield run
            run = Run.start(line)
    if run is not None:
        yield run


def format_record(text, count, show_count=False):
    if show_count:
        return '   {} {}'.format(count, text)
    return text


class LineSource(object):
    """
    A line oriented input. readline() returns the next line with its
    terminator, or an empty string once the input is exhausted.
    """

    name = None

    def __init__(self):
        self._stream = None

    def readline(self):
        try:
            return self._stream.readline()
        except (OSError, ValueError) as e:
            # UnicodeDecodeError is a ValueError
            raise UniqIOError(self.name, _describe(e)) from e

    def __iter__(self):
        return iter(self.readline, '')

    def close(self):
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, tb):
        self.close()


class StdinSource(LineSource):
    name = 'standard input'

    def __init__(self, encoding='utf-8'):
        LineSource.__init__(self)
        buf = getattr(sys.stdin, 'buffer', None)
        if isinstance(buf, io.BufferedIOBase):
            # keep '\r\n' and lone '\r' terminators as they are
            self._stream = io.TextIOWrapper(buf, encoding=encoding, newline='')
            self._wrapped = True
        else:
            self._stream = sys.stdin
            self._wrapped = False

    def close(self):
        # never close the interpreter's stdin
        if self._stream is not None:
            if self._wrapped:
                self._stream.detach()
            self._stream = None


class FileSource(LineSource):

    def __init__(self, filename, encoding='utf-8'):
        LineSource.__init__(self)
        self.name = filename
        try:
            self._stream = open(filename, 'r', encoding=encoding, newline='')
        except OSError as e:
            raise SourceOpenError(filename, _describe(e)) from e


def open_source(filename=STDIN_NAME, encoding='utf-8'):
    """
    Select the line source for filename. '-' is standard input.
    :raises SourceOpenError: if the file cannot be opened
    """
    if filename == STDIN_NAME:
        return StdinSource(encoding=encoding)
    return FileSource(filename, encoding=encoding)


class Sink(object):
    """Destination of the records. open() is called before the first write."""

    name = None

    def open(self):
        pass

    def write(self, text):
        raise NotImplementedError

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, tb):
        pass


class StdoutSink(Sink):
    """
    Standard output, re-wrapped like StdinSource so records go out in the
    configured encoding with their terminators untouched.
    """

    name = 'standard output'

    def __init__(self, encoding='utf-8'):
        self.encoding = encoding
        self._stream = None
        self._wrapped = False

    def open(self):
        try:
            sys.stdout.flush()
        except (OSError, ValueError) as e:
            raise UniqIOError(self.name, _describe(e)) from e
        buf = getattr(sys.stdout, 'buffer', None)
        if isinstance(buf, io.BufferedIOBase):
            self._stream = io.TextIOWrapper(buf, encoding=self.encoding, newline='')
            self._wrapped = True
        else:
            self._stream = sys.stdout
            self._wrapped = False

    def write(self, text):
        try:
            self._stream.write(text)
        except (OSError, ValueError) as e:
            # UnicodeEncodeError is a ValueError
            raise UniqIOError(self.name, _describe(e)) from e

    def close(self):
        if self._stream is None:
            return
        stream, self._stream = self._stream, None
        try:
            stream.flush()
        except (OSError, ValueError) as e:
            self._release(stream, quiet=True)
            raise UniqIOError(self.name, _describe(e)) from e
        self._release(stream)

    def _release(self, stream, quiet=False):
        # never close the interpreter's stdout
        if not self._wrapped:
            return
        if quiet:
            _close_quietly(stream.detach)
        else:
            stream.detach()

    def __exit__(self, exc_type, exc_value, tb):
        if self._stream is None:
            return
        stream, self._stream = self._stream, None
        self._release(stream, quiet=exc_type is not None)


class FileSink(Sink):
    """
    A file created (or truncated) on open(). close() flushes the file and,
    unless fsync is False, syncs it to storage.
    """

    def __init__(self, filename, encoding='utf-8', fsync=True):
        self.name = filename
        self.encoding = encoding
        self.fsync = fsync
        self._stream = None

    def open(self):
        try:
            self._stream = open(self.name, 'w', encoding=self.encoding, newline='')
        except OSError as e:
            raise SinkCreateError(self.name, _describe(e)) from e

    def write(self, text):
        try:
            self._stream.write(text)
        except (OSError, ValueError) as e:
            raise UniqIOError(self.name, _describe(e)) from e

    def close(self):
        if self._stream is None:
            return
        stream, self._stream = self._stream, None
        try:
            stream.flush()
            if self.fsync:
                os.fsync(stream.fileno())
        except OSError as e:
            # close() still releases the descriptor when its own flush fails
            _close_quietly(stream.close)
            raise UniqIOError(self.name, _describe(e)) from e
        try:
            stream.close()
        except OSError as e:
            raise UniqIOError(self.name, _describe(e)) from e

    def __exit__(self, exc_type, exc_value, tb):
        if self._stream is None:
            return
        stream, self._stream = self._stream, None
        if exc_type is None:
            stream.close()
        else:
            _close_quietly(stream.close)


def open_sink(filename=None, encoding='utf-8', fsync=True):
    """Standard output when filename is None, else a file created lazily."""
    if filename is None:
        return StdoutSink(encoding=encoding)
    return FileSink(filename, encoding=encoding, fsync=fsync)


class Collapser(object):
    """Writes one record per run of adjacent trim-equal lines."""

    def __init__(self, show_count=False):
        self.show_count = show_count
        self.logger = logging.getLogger('Uniqr.Collapser')

    def process(self, source, sink):
        """
        Copy source to sink, collapsing runs.
        :param source: where the lines come from
        :type source: LineSource
        :param sink: where the records go; only opened if source has a line
        :type sink: Sink
        :return: number of lines read and records written
        :rtype: CollapseResult
        :raises UniqError: on the first I/O failure
        """
        first = source.readline()
        if not first:
            self.logger.debug('%s: empty input', source.name)
            return CollapseResult(0, 0)

        sink.open()
        self.logger.debug('%s -> %s', source.name, sink.name)

        lines = records = 0
        for run in iter_runs(itertools.chain([first], source)):
            self.logger.debug('run of %d closed', run.count)
            sink.write(format_record(run.text, run.count, self.show_count))
            lines += run.count
            records += 1

        sink.close()
        return CollapseResult(lines, records)
