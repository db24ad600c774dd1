"""Ressourcen-Berater (statische Stichwort- und Vorlagentabellen)."""

from .resource_advisor import ResourceAdvisor, classify, suggest, clean_topic_name

__all__ = ["ResourceAdvisor", "classify", "suggest", "clean_topic_name"]
