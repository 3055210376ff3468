# -*- coding: utf-8 -*-
"""
运行时配置模块
四个滑条参数: 温度 / 活化能 / 反应物能量 / 产物能量
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from config import (
    TEMPERATURE_RANGE,
    ACTIVATION_ENERGY_RANGE,
    ENERGY_EDUKT_RANGE,
    ENERGY_PRODUCT_RANGE,
)


# 参数名 -> (min, max, default)
PARAMETER_RANGES: Dict[str, Tuple[float, float, float]] = {
    "temperature": TEMPERATURE_RANGE,
    "activation_energy": ACTIVATION_ENERGY_RANGE,
    "energy_edukt": ENERGY_EDUKT_RANGE,
    "energy_product": ENERGY_PRODUCT_RANGE,
}


def clamp_parameter(name: str, value: float) -> float:
    """将参数限制在滑条范围内"""
    if name not in PARAMETER_RANGES:
        raise ValueError(f"Unknown parameter: {name!r}")
    low, high, _ = PARAMETER_RANGES[name]
    return max(low, min(high, float(value)))


@dataclass
class RuntimeConfig:
    """
    模拟运行时配置

    属性:
        temperature: 温度 (K)
        activation_energy: 正反应活化能
        energy_edukt: 反应物 (A + B) 能级
        energy_product: 产物 (AB) 能级
    """
    temperature: float = TEMPERATURE_RANGE[2]
    activation_energy: float = ACTIVATION_ENERGY_RANGE[2]
    energy_edukt: float = ENERGY_EDUKT_RANGE[2]
    energy_product: float = ENERGY_PRODUCT_RANGE[2]

    def __post_init__(self):
        for name in PARAMETER_RANGES:
            setattr(self, name, clamp_parameter(name, getattr(self, name)))

    def set_parameter(self, name: str, value: float) -> float:
        """设置单个参数（自动钳制），返回实际生效的值"""
        clamped = clamp_parameter(name, value)
        setattr(self, name, clamped)
        return clamped

    def to_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in PARAMETER_RANGES}
