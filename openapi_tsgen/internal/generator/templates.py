class Templates:
    """Шаблоны для генерации файлов"""

    api_group = """/* eslint-disable @typescript-eslint/no-explicit-any */

{imports}

export type Method = 'GET' | 'POST' | 'PUT' | 'PATCH' | 'DELETE';

export type QueryParams = Record<string, string | number | undefined>;

export type MiddlewareParams = {{
  method: Method;
  route: string;
  query?: QueryParams;
  body?: any;
}}

export type Middleware = (params: MiddlewareParams) => Promise<any>;

function interpolateParams(url: string, params: QueryParams) {{
  let updatedUrl = url;

  while (true) {{
    const match = updatedUrl.match(/{{([A-Za-z_][A-Za-z0-9_]*)}}/);

    if (!match) {{
      break;
    }}

    const value = params[match[1]] ?? '';

    updatedUrl = `${{updatedUrl.substr(0, match.index)}}${{value}}${{updatedUrl.substr((match.index || 0) + match[0].length)}}`;
  }}

  return updatedUrl;
}}

class ApiGroup {{
  public readonly method: Method;

  private readonly middleware: Middleware;

  public constructor(method: Method, middleware: Middleware) {{
    this.method = method;
    this.middleware = middleware;
  }}

  protected callApi(route: string, query?: QueryParams, body?: any): Promise<any> {{
    return this.middleware({{
      method: this.method,
      route,
      query,
      body,
    }});
  }}
}}"""

    named_imports = """import {{
  {names}
}} from './types';"""

    namespace_import = "import * as {namespace} from './types';"

    group_class = """class ApiGroup{group} extends ApiGroup {{
  public constructor(middleware: Middleware) {{
    super('{method}', middleware);
  }}
{methods}
}}"""

    method = """
  public async '{route}'({params}): Promise<{result}> {{
    return this.callApi({call_args});
  }}"""

    api_service = """export class ApiService {{
{fields}

  constructor(middleware: Middleware) {{
{assignments}
  }}
}}"""


templates = Templates()
