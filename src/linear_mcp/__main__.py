from linear_mcp.mcp_server import main

main()
