from clearance_nav.main import main

raise SystemExit(main())
