"""
capstone_platform tests

Covers the three microservices of the platform:

- accounts service: registration and account maintenance (`accounts_service`)
- auth service: password digest, token issuance and login (`auth_service`)
- records service: capstone entry records and their query filters (`records_service`)
- shared configuration, store and error handling (`common`)
"""
