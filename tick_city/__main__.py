from tick_city.cli import main

raise SystemExit(main())
