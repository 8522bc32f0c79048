import argparse
import logging
import random
import sys

from config import load_settings, parse_log_level
from errors import ArgumentError, ExitStatus, RandomWriterError
from generator import generate
from markov_model import build_from_files

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


class ArgumentParser(argparse.ArgumentParser):

    def error(self, message):
        # Ошибки разбора аргументов дают свой код завершения, а не код 2 argparse
        raise ArgumentError(message)


def build_parser():
    parser = ArgumentParser(
        prog='random_writer',
        description='Генерация текста по символьной модели Маркова порядка k',
    )
    parser.add_argument('prefix_length', type=int, help='длина префикса k (>= 1)')
    parser.add_argument('output_length', type=int, help='длина выходного текста n (>= 0)')
    parser.add_argument('sources', nargs='+', help='входные текстовые файлы')
    parser.add_argument('--seed', type=int, default=None, help='случайное зерно')
    parser.add_argument('--stats', action='store_true', help='вывести анализ модели в stderr')
    parser.add_argument('--plot', default=None, help='сохранить график продолжений начального префикса')
    parser.add_argument('--log-level', default=None, help='уровень логирования')
    parser.add_argument('--env-file', default=None, help='путь к .env файлу')
    return parser


def configure_logging(level):
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger().setLevel(level)


def run(argv=None, stdout=None, stderr=None):
    """
    Полный запуск: разбор аргументов, построение модели, генерация

    Returns:
        ExitStatus: код завершения
    """
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    try:
        args = build_parser().parse_args(argv)
        settings = load_settings(args.env_file)
        configure_logging(parse_log_level(args.log_level) if args.log_level else settings.log_level)

        k, n = args.prefix_length, args.output_length
        if k < 1:
            raise ArgumentError(f"Длина префикса должна быть >= 1, получено {k}")
        if n < 0:
            raise ArgumentError(f"Длина вывода должна быть >= 0, получено {n}")

        seed = args.seed if args.seed is not None else settings.seed
        rng = random.Random(seed)

        model = build_from_files(args.sources, k, settings.encoding, settings.encoding_errors)
        if args.stats:
            from analyze_model import format_report
            print(format_report(model), file=stderr)

        text_generator = generate(model, k, n, rng)
        if args.plot:
            from analyze_model import plot_successors
            try:
                plot_successors(model, text_generator.seed, args.plot)
            except OSError as e:
                raise ArgumentError(f"Не удалось сохранить график в '{args.plot}': {e}")
            logger.info(f"График сохранён в '{args.plot}'")

        text_generator.write_to(stdout)
        stdout.write('\n')
        stdout.flush()

    except RandomWriterError as e:
        logger.error(f"Ошибка: {e}")
        return e.exit_status

    return ExitStatus.SUCCESS


def main():
    sys.exit(int(run()))


if __name__ == "__main__":
    main()
