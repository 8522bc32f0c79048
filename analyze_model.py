from dataclasses import dataclass

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np


@dataclass
class ModelStatistics:
    prefix_length: int
    prefix_count: int
    transition_count: int
    mean_branching: float
    max_branching: int
    deterministic_share: float
    mean_entropy: float


def _entropy(frequencies):
    freq = np.asarray(frequencies, dtype=float)
    total = freq.sum()
    if total <= 0:
        return 0.0
    p = freq / total
    p = p[p > 0]
    return float(-(p * np.log2(p)).sum())


def prefix_entropy(model, prefix):
    """Условная энтропия следующего символа в битах"""
    return _entropy(list(model.counts(prefix).values()))


def model_statistics(model):
    prefixes = model.prefixes
    if not prefixes:
        return ModelStatistics(model.prefix_length, 0, 0, 0.0, 0, 0.0, 0.0)

    branching = np.array([len(model.counts(p)) for p in prefixes])
    entropies = np.array([prefix_entropy(model, p) for p in prefixes])

    return ModelStatistics(
        prefix_length=model.prefix_length,
        prefix_count=len(prefixes),
        transition_count=model.total_successors,
        mean_branching=float(branching.mean()),
        max_branching=int(branching.max()),
        deterministic_share=float((branching == 1).mean()),
        mean_entropy=float(entropies.mean()),
    )


def top_prefixes(model, limit=10):
    """Префиксы с наибольшим числом наблюдаемых продолжений"""
    prefixes = list(model.prefixes)
    if not prefixes:
        return []

    totals = np.array([len(model.successors(p)) for p in prefixes])
    # Устойчивая сортировка: при равенстве сохраняется порядок появления
    order = np.argsort(-totals, kind='stable')[:limit]
    return [(prefixes[i], int(totals[i])) for i in order]


def format_report(model, limit=5):
    stats = model_statistics(model)

    lines = [
        "АНАЛИЗ МОДЕЛИ МАРКОВА",
        "=" * 50,
        f"Длина префикса:            {stats.prefix_length}",
        f"Уникальных префиксов:      {stats.prefix_count:,}",
        f"Всего переходов:           {stats.transition_count:,}",
        f"Среднее число продолжений: {stats.mean_branching:.2f}",
        f"Максимум продолжений:      {stats.max_branching}",
        f"Доля однозначных:          {stats.deterministic_share:.2%}",
        f"Средняя энтропия:          {stats.mean_entropy:.4f} бит",
    ]

    top = top_prefixes(model, limit)
    if top:
        lines.append("")
        lines.append(f"Топ-{len(top)} префиксов:")
        lines.append("-" * 40)
        for prefix, total in top:
            probs = sorted(model.probabilities(prefix).items(), key=lambda x: x[1], reverse=True)[:3]
            shown = ', '.join(f"{char!r}: {prob:.4f}" for char, prob in probs)
            lines.append(f"  {prefix!r:<12} {total:>8,}  {shown}")

    return "\n".join(lines)


def plot_successors(model, prefix, path):
    """Сохранение гистограммы вероятностей продолжений префикса"""
    probs = sorted(model.probabilities(prefix).items(), key=lambda x: x[1], reverse=True)
    if not probs:
        raise KeyError(prefix)

    symbols = [repr(char).strip("'") for char, _ in probs]
    values = [prob for _, prob in probs]

    fig = plt.figure(figsize=(max(6, len(symbols) * 0.4), 4))
    try:
        plt.bar(range(len(values)), values, color='steelblue')
        plt.xticks(range(len(symbols)), symbols)
        plt.xlabel('Следующий символ')
        plt.ylabel('Вероятность')
        plt.title(f'Продолжения префикса {prefix!r}')
        plt.grid(True, axis='y', alpha=0.3)
        plt.tight_layout()
        plt.savefig(path, dpi=150, bbox_inches='tight')
    finally:
        plt.close(fig)
    return path
