from release_graph.cli.app import main

main()
