from wordchains.engine.validator.validator import RejectReason, ValidationResult, WordValidator

__all__ = ["RejectReason", "ValidationResult", "WordValidator"]
