import asyncio
import datetime
import io
import os
import pathlib
import sys
import threading
from collections import defaultdict
from typing import (
    Callable,
    Dict,
    TypeVar,
)

import msgspec

from meta_version.logging.config import LoggingConfig, StreamType
from meta_version.logging.models import Entry, Log


T = TypeVar('T', bound=Entry)


class LoggerStream:
    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        filename: str | None = None,
        directory: str | None = None,
    ) -> None:
        if name is None:
            name = "default"

        self._name = name
        self._default_template = template
        self._default_logfile = filename
        self._default_log_directory = directory

        self._init_lock = asyncio.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._encoder = msgspec.json.Encoder()

        self._files: Dict[str, io.TextIOWrapper] = {}
        self._file_locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._cwd: str | None = None

        self._config = LoggingConfig()
        self._initialized: bool = False

    @property
    def name(self):
        return self._name

    async def initialize(self):

        async with self._init_lock:

            if self._initialized:
                return

            if self._loop is None:
                self._loop = asyncio.get_running_loop()

            if self._cwd is None:
                self._cwd = await self._loop.run_in_executor(
                    None,
                    os.getcwd,
                )

            self._initialized = True

    async def log(
        self,
        entry: T | Log[T],
        template: str | None = None,
        path: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        filename: str | None = None
        directory: str | None = None

        if path:
            logfile_path = pathlib.Path(path)
            is_logfile = len(logfile_path.suffix) > 0

            filename = logfile_path.name if is_logfile else None
            directory = str(logfile_path.parent.absolute()) if is_logfile else str(logfile_path.absolute())

        if template is None:
            template = self._default_template

        if filename is None:
            filename = self._default_logfile

        if directory is None:
            directory = self._default_log_directory

        if filename or directory:
            await self._log_to_file(
                entry,
                filename=filename,
                directory=directory,
                filter=filter,
            )

        else:
            await self._log(
                entry,
                template=template,
                filter=filter,
            )

    async def _log(
        self,
        entry_or_log: T | Log[T],
        template: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        log = self._to_log(entry_or_log)
        entry = log.entry

        if self._config.enabled(entry.level) is False:
            return

        if filter and filter(entry) is False:
            return

        if self._initialized is False:
            await self.initialize()

        if template is None:
            template = "{timestamp} - {level} - {thread_id} - {filename}:{function_name}.{line_number} - {message}"

        line = entry.to_template(
            template,
            context={
                "filename": log.filename,
                "function_name": log.function_name,
                "line_number": log.line_number,
                "thread_id": log.thread_id,
                "timestamp": log.timestamp,
            },
        )

        await self._loop.run_in_executor(
            None,
            self._write_to_stream,
            self._config.output,
            line,
        )

    def _write_to_stream(self, stream_type: StreamType, line: str):
        stream = sys.stdout if stream_type == StreamType.STDOUT else sys.stderr
        stream.write(line + "\n")
        stream.flush()

    async def _log_to_file(
        self,
        entry_or_log: T | Log[T],
        filename: str | None = None,
        directory: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        log = self._to_log(entry_or_log)
        entry = log.entry

        if self._config.enabled(entry.level) is False:
            return

        if filter and filter(entry) is False:
            return

        if self._initialized is False:
            await self.initialize()

        if filename is None:
            filename = "logs.json"

        logfile_path = self._to_logfile_path(filename, directory=directory)

        async with self._file_locks[logfile_path]:
            await self._loop.run_in_executor(
                None,
                self._write_to_file,
                logfile_path,
                self._encoder.encode(log) + b"\n",
            )

    def _write_to_file(self, logfile_path: str, data: bytes):
        logfile = self._files.get(logfile_path)
        if logfile is None or logfile.closed:
            pathlib.Path(logfile_path).parent.mkdir(parents=True, exist_ok=True)
            logfile = open(logfile_path, "a", encoding="utf-8")
            self._files[logfile_path] = logfile

        logfile.write(data.decode())
        logfile.flush()

    def _to_logfile_path(
        self,
        filename: str,
        directory: str | None = None,
    ):
        filename_path = pathlib.Path(filename)

        if filename_path.suffix != ".json":
            raise ValueError("Err. - file must be JSON file for logs.")

        if self._config.directory:
            directory = self._config.directory

        elif directory is None:
            directory = self._cwd

        return os.path.join(directory, filename_path)

    def _to_log(self, entry_or_log: T | Log[T]) -> Log[T]:
        if isinstance(entry_or_log, Log):
            return entry_or_log

        try:
            frame = sys._getframe(3)

        except ValueError:
            frame = sys._getframe(0)

        code = frame.f_code

        return Log(
            entry=entry_or_log,
            filename=code.co_filename,
            function_name=code.co_name,
            line_number=frame.f_lineno,
            thread_id=threading.get_native_id(),
            timestamp=datetime.datetime.now(datetime.UTC).isoformat(),
        )

    async def close(self):
        for logfile_path in list(self._files):
            async with self._file_locks[logfile_path]:
                await self._loop.run_in_executor(
                    None,
                    self._close_file_at_path,
                    logfile_path,
                )

        self._initialized = False

    def _close_file_at_path(self, logfile_path: str):
        if (
            logfile := self._files.pop(logfile_path, None)
        ) and logfile.closed is False:
            logfile.close()

