"""Leave Portal package.

Feature modules (hours, holidays, requests, ...) with a thin Flask controller
layer over service/repository layers. The leave-hours engine lives in
``hours.calculator`` and has no dependency on the rest of the package.
"""
