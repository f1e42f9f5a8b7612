from solafon_mcp.mcp_server import main

main()
