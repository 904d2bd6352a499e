"""
Core do ActiveConfig.

Implementação canônica, independente de adapters de acesso: cache em
camadas, weave de overlays, staleness e notificação de mudanças.
"""
