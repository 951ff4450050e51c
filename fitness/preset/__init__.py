"""YAML-backed presets."""

from fitness.preset.yml_handler import YmlHandler

__all__ = ["YmlHandler"]
