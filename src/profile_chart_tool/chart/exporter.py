"""
图表导出模块 (JSON / Excel / PNG)
"""

import json
from pathlib import Path
from typing import Iterable, List, Union
import logging

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import matplotlib.patches as patches
import pandas as pd

from .model import Chart

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ('json', 'xlsx', 'png')


def export_json(chart: Chart, file_path: Union[str, Path]) -> Path:
    """将图表写为 JSON 文件"""
    file_path = Path(file_path)
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(chart.to_dict(), f, ensure_ascii=False, indent=2)
    print(f"生成 JSON 文件: {file_path}")
    return file_path


def export_excel(chart: Chart, file_path: Union[str, Path]) -> Path:
    """将图表写为 Excel 文件，图例、bar、连接线、阶段列各占一个 sheet"""
    file_path = Path(file_path)
    data = chart.to_dict()
    sheets = {
        'Legend': (data['types'], ['label', 'color']),
        'Bars': (data['bars'], ['thread', 'start', 'stop', 'type', 'on_critical_path', 'label']),
        'Lines': (data['lines'], ['from_thread', 'to_thread', 'time']),
        'Columns': (data['columns'], ['start', 'width', 'label', 'type']),
    }

    with pd.ExcelWriter(file_path, engine='openpyxl') as writer:
        for sheet_name, (rows, columns) in sheets.items():
            pd.DataFrame(rows, columns=columns).to_excel(writer, sheet_name=sheet_name, index=False)
        if chart.statistics or chart.comment:
            summary = [{'item': 'comment', 'value': chart.comment}]
            summary.extend({'item': 'statistics', 'value': line} for line in chart.statistics)
            pd.DataFrame(summary).to_excel(writer, sheet_name='Summary', index=False)

    print(f"生成 Excel 文件: {file_path}")
    return file_path


def render_png(chart: Chart, file_path: Union[str, Path]) -> Path:
    """使用 matplotlib 将图表渲染为 PNG，每个线程一行"""
    file_path = Path(file_path)
    plt.rcParams['font.sans-serif'] = ['DejaVu Sans', 'Arial', 'sans-serif']
    plt.rcParams['axes.unicode_minus'] = False

    rows = chart.rows
    thread_to_y = {thread_id: i for i, thread_id in enumerate(rows)}
    fig, ax = plt.subplots(figsize=(14, max(3, 0.5 * len(rows) + 2)))

    for column in chart.columns:
        ax.axvspan(column.start, column.start + column.width,
                   color=column.type.hex_color, alpha=0.08)

    for thread_id, bars in rows.items():
        y = thread_to_y[thread_id]
        for bar in bars:
            ax.barh(
                y=y,
                width=bar.width,
                left=bar.start,
                height=0.6,
                color=bar.type.hex_color,
                edgecolor='red' if bar.on_critical_path else 'black',
                linewidth=1.5 if bar.on_critical_path else 0.3,
                align='center',
            )

    for line in chart.lines:
        y0 = thread_to_y.get(line.start_thread)
        y1 = thread_to_y.get(line.stop_thread)
        if y0 is None or y1 is None:
            continue
        ax.plot([line.time, line.time], [y0, y1], color='red', linewidth=1.0)

    used_types = []
    for bar in chart.bars:
        if bar.type not in used_types:
            used_types.append(bar.type)
    handles = [patches.Patch(color=t.hex_color, label=t.label) for t in used_types]
    if handles:
        ax.legend(handles=handles, loc='upper left', bbox_to_anchor=(1.01, 1.0), fontsize='small')

    ax.set_yticks(list(thread_to_y.values()))
    ax.set_yticklabels([f"thread {t}" for t in thread_to_y])
    ax.invert_yaxis()
    if chart.max_stop:
        ax.set_xlim(right=chart.max_stop)
    ax.set_xlabel('Time (ns)')
    ax.set_title(chart.comment or 'Build profile')
    ax.grid(True, axis='x', alpha=0.3)

    plt.tight_layout()
    fig.savefig(file_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f"生成 PNG 文件: {file_path}")
    return file_path


_EXPORTERS = {
    'json': (export_json, 'json'),
    'xlsx': (export_excel, 'xlsx'),
    'png': (render_png, 'png'),
}


def export_chart(chart: Chart, output_dir: Union[str, Path], base_name: str,
                 formats: Iterable[str] = ('json',)) -> List[Path]:
    """
    按指定格式导出图表

    Args:
        chart: 已构建完成的图表
        output_dir: 输出目录
        base_name: 输出文件的基础名称
        formats: 输出格式列表，支持 json, xlsx, png

    Returns:
        List[Path]: 生成的文件路径列表
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    files = []
    for fmt in formats:
        if fmt not in _EXPORTERS:
            raise ValueError(f"不支持的输出格式: {fmt}。支持的格式: {', '.join(SUPPORTED_FORMATS)}")
        exporter, suffix = _EXPORTERS[fmt]
        try:
            files.append(exporter(chart, output_path / f"{base_name}.{suffix}"))
        except Exception as e:
            logger.error(f"生成 {fmt} 文件失败: {e}")
            raise
    return files
