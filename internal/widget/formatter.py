"""
Widget formatter: terminal and JSON output of RenderModel
"""

from dataclasses import asdict
from typing import Any, Dict, List

from .models import RenderKind, RenderModel


def formatText(model: RenderModel) -> str:
    """
    Format render model as plain-text panel

    Example output:
        == Weather ==
        22°C, Clear Sky
        London
        Icon: https://openweathermap.org/img/wn/01d@2x.png
        Humidity: 54%
        Wind: 3.1 m/s
    """
    lines: List[str] = []
    if model.title:
        lines.append(f"== {model.title} ==")

    if model.kind != RenderKind.RENDERED or model.details is None:
        lines.append(model.message or "")
        return "\n".join(lines)

    details = model.details
    lines.append(f"{details.temperature}, {details.description}" if details.description else details.temperature)
    if details.locationName:
        lines.append(details.locationName)
    if details.iconUrl:
        lines.append(f"Icon: {details.iconUrl}")
    if details.humidityLine:
        lines.append(details.humidityLine)
    if details.windLine:
        lines.append(f"Wind: {details.windLine}")

    return "\n".join(lines)


def toDict(model: RenderModel) -> Dict[str, Any]:
    """Convert render model to JSON-serializable dict"""
    ret = asdict(model)
    ret["kind"] = str(model.kind)
    return ret
