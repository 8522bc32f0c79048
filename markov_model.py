from collections import Counter
import logging
import time

from config import load_settings
from errors import ArgumentError, CorpusInsufficiencyError, ModelFrozenError
from text_processor import TextProcessor

logger = logging.getLogger(__name__)


def check_prefix_length(k):
    if isinstance(k, bool) or not isinstance(k, int) or k < 1:
        raise ArgumentError(f"Длина префикса должна быть целым числом >= 1, получено {k!r}")
    return k


class MarkovModel:
    """
    Символьная модель Маркова фиксированного порядка

    Каждому префиксу из k символов соответствует список символов, которые
    встречались сразу после него. Повторы сохраняются: каждое вхождение
    увеличивает вес символа при выборке.
    """

    def __init__(self, prefix_length):
        self.prefix_length = check_prefix_length(prefix_length)
        self._successors = {}
        self._prefixes = None
        self._total = 0

    def append(self, prefix, successor):
        """Добавление наблюдаемого продолжения префикса"""
        if self._prefixes is not None:
            raise ModelFrozenError("Модель заморожена, добавление невозможно")
        if len(prefix) != self.prefix_length:
            raise ValueError(f"Префикс {prefix!r} не длины {self.prefix_length}")
        if len(successor) != 1:
            raise ValueError(f"Ожидался один символ, получено {successor!r}")

        self._successors.setdefault(prefix, []).append(successor)
        self._total += 1

    def update_from_stream(self, stream, source=None):
        """
        Обучение модели на одном символьном потоке

        Args:
            stream: файловый объект, строка или итерируемый набор строк
            source: имя источника для сообщений об ошибках

        Returns:
            int: количество записанных переходов
        """
        chars = TextProcessor.iter_chars(stream)
        prefix = TextProcessor.read_prefix(chars, self.prefix_length)
        if len(prefix) < self.prefix_length:
            raise CorpusInsufficiencyError(source, self.prefix_length, len(prefix))

        recorded = 0
        for char in chars:
            self.append(prefix, char)
            prefix = TextProcessor.slide(prefix, char)
            recorded += 1
        return recorded

    def freeze(self):
        if self._prefixes is None:
            self._prefixes = tuple(self._successors)
        return self

    @property
    def frozen(self):
        return self._prefixes is not None

    @property
    def prefixes(self):
        # Порядок первого появления; по этому кортежу выбирается начальный префикс
        if self._prefixes is not None:
            return self._prefixes
        return tuple(self._successors)

    @property
    def total_successors(self):
        return self._total

    def successors(self, prefix):
        found = self._successors.get(prefix)
        if found is None:
            return None
        return tuple(found)

    def counts(self, prefix):
        return Counter(self._successors.get(prefix, ()))

    def probabilities(self, prefix):
        """
        Получение вероятностей следующего символа для заданного префикса

        Returns:
            dict: словарь вероятностей символов (пустой для неизвестного префикса)
        """
        found = self._successors.get(prefix)
        if not found:
            return {}

        total = len(found)
        return {char: freq / total for char, freq in Counter(found).items()}

    def __contains__(self, prefix):
        return prefix in self._successors

    def __len__(self):
        return len(self._successors)

    def __bool__(self):
        return bool(self._successors)

    def __iter__(self):
        return iter(self.prefixes)

    def __repr__(self):
        return (f"MarkovModel(prefix_length={self.prefix_length}, "
                f"prefixes={len(self)}, transitions={self._total})")


def build(streams, k):
    """
    Построение модели по упорядоченному набору символьных потоков

    Если хотя бы один поток короче k, построение прерывается целиком,
    частично собранная модель не возвращается.
    """
    if isinstance(streams, str):
        raise ArgumentError("Ожидался список потоков, а не одна строка")

    model = MarkovModel(k)
    start_time = time.time()

    count = 0
    for index, stream in enumerate(streams):
        source = TextProcessor.source_name(stream, index)
        recorded = model.update_from_stream(stream, source)
        logger.info(f"Источник {source}: {recorded:,} переходов")
        count += 1

    if count == 0:
        raise ArgumentError("Не задано ни одного источника текста")

    model.freeze()
    logger.info(f"Модель построена: {len(model):,} префиксов, "
                f"{model.total_successors:,} переходов, время: {time.time() - start_time:.2f} сек")
    return model


def build_from_files(paths, k, encoding=None, errors=None):
    """
    Построение модели по текстовым файлам

    Файлы открываются по одному в заданном порядке и закрываются сразу после
    чтения, в том числе при ошибке нехватки символов.
    """
    paths = list(paths)
    if not paths:
        raise ArgumentError("Не задано ни одного источника текста")

    if encoding is None or errors is None:
        settings = load_settings()
        encoding = encoding or settings.encoding
        errors = errors or settings.encoding_errors

    model = MarkovModel(k)
    start_time = time.time()

    for path in paths:
        logger.info(f"Чтение файла {path}...")
        with TextProcessor.open_source(path, encoding, errors) as f:
            recorded = model.update_from_stream(f, str(path))
        logger.info(f"  {path}: {recorded:,} переходов")

    model.freeze()
    logger.info(f"Модель построена: {len(model):,} префиксов, "
                f"{model.total_successors:,} переходов, время: {time.time() - start_time:.2f} сек")
    return model
