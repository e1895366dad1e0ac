"""netcup CCP API client and ACME DNS-01 hook."""
