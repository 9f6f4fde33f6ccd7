from lwr_tlbx.cli import main


raise SystemExit(main())
