from banachfp.analysis.diagnostics import (
    ContractionCertificate,
    check_contraction,
    estimate_contraction_factor,
)

__all__ = [
    'ContractionCertificate',
    'check_contraction',
    'estimate_contraction_factor',
]
