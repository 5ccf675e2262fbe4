"""
STAF consumer suites.

Each suite keeps its API-specific framework (models, services, stubs) next
to its tests:
  - tictactoe: tic-tac-toe board API, one test module per client backend
  - uspto: USPTO Data Set API (dataset listing, fields, record search)
  - petstore: Swagger Petstore v1 (list, create and fetch pets)
  - unit: tests of the staf framework itself

The package stays importable so `staf-run` and IDEs can resolve suite code.
"""
