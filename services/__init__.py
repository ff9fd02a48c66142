"""
KYC Services
============

Service applications built on the ``kyc_common`` library.

Services:
    - kyc: Identity verification and attestation issuance
"""
