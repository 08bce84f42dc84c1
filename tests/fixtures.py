"""Builders for DSB export markup used across the parser tests."""

from __future__ import annotations

from typing import Optional, Sequence

DEFAULT_CREATED = "(Stand vom 12.10.2023 um 7:30 Uhr)"
DEFAULT_ABSENCES = (("8E", "1.-11."),)
DEFAULT_GROUPS = (("5a", (("MÜL", "3", "SCH", "101", "Raumänderung"),)),)


def absence_table(rows: Sequence[tuple[str, str]]) -> str:
    body = "".join(
        f'<tr class="K"><th rowspan="1" class="K">{class_}</th>'
        f'<td class="K" align="center">{periods}</td></tr>\n'
        for class_, periods in rows
    )
    return (
        '<table class="K" border="3">\n'
        '<tr><th class="K" colspan="2">Abwesende Klassen</th></tr>\n'
        f"{body}</table>\n"
    )


def info_table(lines: Sequence[str]) -> str:
    body = "".join(
        f'<tr class="F"><th class="F" colspan="2">{line}</th></tr>\n' for line in lines
    )
    return f'<table class="F" border="3">\n{body}</table>\n'


def substitution_table(groups: Sequence[tuple[str, Sequence[Sequence[str]]]]) -> str:
    parts = [
        '<table class="k" border-width="3">\n'
        "<thead><tr><th>Klasse</th><th>Lehrer</th><th>Std.</th>"
        "<th>Vertreter</th><th>Raum</th><th>Info</th></tr></thead>\n"
    ]
    for class_, rows in groups:
        parts.append('<tbody class="k">\n')
        for index, cells in enumerate(rows):
            header = (
                f'<th rowspan="{len(rows)}" class="k">{class_}</th>' if index == 0 else ""
            )
            tds = "".join(f'<td class="k">{cell}</td>' for cell in cells)
            parts.append(f'<tr class="k">{header}{tds}</tr>\n')
        parts.append("</tbody>\n")
    parts.append("</table>\n")
    return "".join(parts)


def day(
    date: str = "13.10.2023",
    *,
    title: Optional[str] = None,
    created: Optional[str] = DEFAULT_CREATED,
    absences: Optional[Sequence[tuple[str, str]]] = DEFAULT_ABSENCES,
    infos: Optional[Sequence[str]] = None,
    groups: Optional[Sequence[tuple[str, Sequence[Sequence[str]]]]] = DEFAULT_GROUPS,
) -> str:
    """One day's bulletin; pass None to leave a section out."""
    if title is None:
        title = f"Vertretungsplan für Freitag, {date}"
    parts = [f'<a name="{date}">&nbsp;</a>\n', f"<h2>{title}</h2>\n"]
    if created is not None:
        parts.append(f"<h4>{created}</h4>\n")
    if infos is not None:
        parts.append(info_table(infos))
    if absences is not None:
        parts.append(absence_table(absences))
    if groups is not None:
        parts.append(substitution_table(groups))
    parts.append('<p><a href="#oben">nach oben</a></p>\n')
    return "".join(parts)


def export(*days: str) -> str:
    """A full export wrapping the given days."""
    return (
        "<html>\n<head><title>Vertretungsplan</title></head>\n<body>\n"
        '<a name="oben"></a>\n'
        "<h1>Effner-Gymnasium</h1>\n"
        + "".join(days)
        + "</body>\n</html>\n"
    )
