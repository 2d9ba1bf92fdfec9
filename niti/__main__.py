from niti.main import main

raise SystemExit(main())
