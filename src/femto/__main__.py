from femto.adapters.textual.app import main

raise SystemExit(main())
