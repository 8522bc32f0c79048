from enum import Enum
import logging
import random

from config import load_settings
from errors import ArgumentError, EmptyModelError, GenerationGapError
from text_processor import TextProcessor

logger = logging.getLogger(__name__)


class GeneratorState(Enum):
    SEEDED = 'seeded'
    SAMPLING = 'sampling'
    DONE = 'done'
    FAILED = 'failed'


class TextGenerator:
    """
    Ленивая генерация текста по модели Маркова

    Один экземпляр выдаёт ровно одну последовательность: начальный префикс
    выбирается при создании, затем символы выдаются по одному при итерации.
    """

    def __init__(self, model, length, rng):
        if not model:
            raise EmptyModelError()

        self.model = model
        self.length = length
        self.rng = rng
        self.emitted = 0

        # Равномерный выбор среди различных префиксов модели
        self.seed = rng.choice(model.prefixes)
        self.window = self.seed
        self.state = GeneratorState.SEEDED
        logger.debug(f"Начальный префикс: {self.seed!r}")

    def __iter__(self):
        return self

    def __next__(self):
        if self.state in (GeneratorState.DONE, GeneratorState.FAILED):
            raise StopIteration
        if self.emitted >= self.length:
            self.state = GeneratorState.DONE
            raise StopIteration

        # Сначала выдаются символы начального префикса
        if self.emitted < self.model.prefix_length:
            char = self.seed[self.emitted]
            self.emitted += 1
            return char

        self.state = GeneratorState.SAMPLING
        successors = self.model.successors(self.window)
        if successors is None:
            self.state = GeneratorState.FAILED
            logger.warning(f"Префикс {self.window!r} не встречался в тексте, генерация остановлена")
            raise GenerationGapError(self.window, self.emitted)

        char = self.rng.choice(successors)
        self.window = TextProcessor.slide(self.window, char)
        self.emitted += 1
        return char

    def write_to(self, sink, flush=True):
        """
        Вывод символов в текстовый поток по мере генерации

        Уже записанные символы остаются в потоке, даже если генерация
        прервалась на неизвестном префиксе.
        """
        written = 0
        flush_sink = getattr(sink, 'flush', None) if flush else None
        for char in self:
            sink.write(char)
            written += 1
            if flush_sink is not None:
                flush_sink()
        return written

    def text(self):
        return ''.join(self)


def default_rng():
    settings = load_settings()
    return random.Random(settings.seed)


def generate(model, k, n, rng=None):
    """
    Генерация текста длины n по построенной модели

    Args:
        model: построенная MarkovModel
        k: длина префикса, должна совпадать с порядком модели
        n: длина выходного текста (>= 0)
        rng: источник случайности с методом choice (по умолчанию random.Random)

    Returns:
        TextGenerator: ленивый итератор символов
    """
    if isinstance(k, bool) or not isinstance(k, int) or k != model.prefix_length:
        raise ArgumentError(f"Длина префикса {k!r} не совпадает с порядком модели {model.prefix_length}")
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        raise ArgumentError(f"Длина вывода должна быть целым числом >= 0, получено {n!r}")

    if rng is None:
        rng = default_rng()
    return TextGenerator(model, n, rng)
