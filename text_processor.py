from contextlib import contextmanager
from itertools import islice

from errors import SourceUnavailableError

# Размер блока при чтении файловых потоков
READ_CHUNK_SIZE = 8192


class TextProcessor:

    @staticmethod
    def iter_chars(stream):
        """
        Посимвольный обход потока

        Args:
            stream: текстовый файловый объект (есть read), строка
                    или итерируемый набор строк

        Yields:
            str: очередной символ, без какой-либо нормализации
        """
        if isinstance(stream, str):
            yield from stream
            return

        read = getattr(stream, 'read', None)
        if read is not None:
            while True:
                chunk = read(READ_CHUNK_SIZE)
                if not chunk:
                    return
                yield from chunk
        else:
            for piece in stream:
                yield from piece

    @staticmethod
    def read_prefix(chars, length):
        """Чтение ровно length символов; короче, если поток закончился раньше"""
        return ''.join(islice(chars, length))

    @staticmethod
    def slide(window, char):
        # Сдвиг окна: первый символ отбрасывается, новый дописывается в конец
        return window[1:] + char

    @staticmethod
    def source_name(stream, index):
        name = getattr(stream, 'name', None)
        if isinstance(name, str):
            return name
        return f'<stream {index}>'

    @staticmethod
    @contextmanager
    def open_source(path, encoding='utf-8', errors='replace'):
        """
        Открытие текстового источника с гарантированным закрытием

        newline='' сохраняет переводы строк как есть (\\r\\n не превращается в \\n)
        """
        try:
            f = open(path, 'r', encoding=encoding, errors=errors, newline='')
        except OSError as e:
            raise SourceUnavailableError(str(path), e.strerror or str(e))
        except LookupError as e:
            # Неизвестная кодировка
            raise SourceUnavailableError(str(path), str(e))
        with f:
            try:
                yield f
            except (UnicodeDecodeError, OSError) as e:
                # Ошибки при чтении уже открытого файла
                raise SourceUnavailableError(str(path), str(e))
