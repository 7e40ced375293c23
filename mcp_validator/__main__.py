from mcp_validator.cli import main

main()
