from poi_atlas.server import main

main()
