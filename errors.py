from enum import IntEnum


class ExitStatus(IntEnum):
    """Коды завершения процесса"""
    SUCCESS = 0
    INVALID_ARGUMENTS = 1
    INSUFFICIENT_CHARACTERS = 2


class RandomWriterError(Exception):
    exit_status = ExitStatus.INVALID_ARGUMENTS


class ArgumentError(RandomWriterError, ValueError):
    """Неверная длина префикса, длина вывода или список источников"""
    exit_status = ExitStatus.INVALID_ARGUMENTS


class SourceUnavailableError(ArgumentError):
    def __init__(self, source, reason):
        super().__init__(f"Не удалось открыть источник {source!r}: {reason}")
        self.source = source
        self.reason = reason


class InsufficientCharactersError(RandomWriterError):
    exit_status = ExitStatus.INSUFFICIENT_CHARACTERS


class CorpusInsufficiencyError(InsufficientCharactersError):
    """Источник закончился раньше, чем набрался первый префикс"""

    def __init__(self, source, needed, available):
        super().__init__(
            f"В источнике {source!r} символов: {available}, длина префикса: {needed}"
        )
        self.source = source
        self.needed = needed
        self.available = available


class GenerationGapError(InsufficientCharactersError):
    """Скользящее окно дошло до префикса, которого нет в модели"""

    def __init__(self, window, emitted):
        super().__init__(f"Префикс {window!r} отсутствует в модели (выведено символов: {emitted})")
        self.window = window
        self.emitted = emitted


class EmptyModelError(InsufficientCharactersError):
    def __init__(self):
        super().__init__("Модель пуста, начальный префикс выбрать не из чего")


class ModelFrozenError(RuntimeError):
    pass
