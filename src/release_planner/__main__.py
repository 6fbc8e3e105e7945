from release_planner.cli import main

main()
